"""
Documentation scanner.

Builds baseline documentation records for controllers, either from live
Python classes or from a metadata table, and runs them through the merger.
"""

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Iterable, Optional

from endpoint_doc_merger.config import Config
from endpoint_doc_merger.merger.orchestrator import DocMerger
from endpoint_doc_merger.metadata.reflection import ReflectionMetadataProvider
from endpoint_doc_merger.metadata.table import (
    MetadataTable,
    TableController,
    TableMetadataProvider,
    TableMethod,
)
from endpoint_doc_merger.models.doc import (
    ApiDoc,
    ApiMethodDoc,
    ApiParamDoc,
    ApiResponseObjectDoc,
)
from endpoint_doc_merger.models.type_descriptor import JSONDocType
from endpoint_doc_merger.routing import ROUTE_MAPPING_ATTR

log = logging.getLogger(__name__)


class ModuleLoadError(Exception):
    """Error while importing a module to scan."""
    pass


def load_module(module_path: Path) -> ModuleType:
    """
    Import a Python source file as a module.

    The file's directory is on ``sys.path`` while the module executes, so
    it can import its siblings.

    Args:
        module_path: Path to the ``.py`` file.

    Returns:
        The imported module.

    Raises:
        ModuleLoadError: If the module cannot be imported.
    """
    module_path = module_path.resolve()
    original_sys_path = sys.path.copy()
    parent_dir = str(module_path.parent)
    if parent_dir not in sys.path:
        sys.path.insert(0, parent_dir)

    try:
        spec = importlib.util.spec_from_file_location(module_path.stem, module_path)
        if spec is None or spec.loader is None:
            raise ModuleLoadError(f"Could not create module spec for {module_path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_path.stem] = module
        spec.loader.exec_module(module)
        return module
    except ModuleLoadError:
        raise
    except Exception as e:
        raise ModuleLoadError(f"Failed to import {module_path}: {e}") from e
    finally:
        sys.path = original_sys_path


def _summary(obj: Any) -> Optional[str]:
    doc = inspect.getdoc(obj)
    if not doc:
        return None
    return doc.strip().splitlines()[0]


def _is_mapped(obj: Any) -> bool:
    return getattr(inspect.unwrap(obj), ROUTE_MAPPING_ATTR, None) is not None


def find_controllers(module: ModuleType, names: Optional[Iterable[str]] = None) -> list[type]:
    """
    Find the controller classes defined in a module.

    A controller is a class defined in the module that carries a route
    mapping itself or has at least one mapped handler.

    Args:
        module: The module to search.
        names: If given, only classes with these names are returned.

    Returns:
        Controller classes in definition order.
    """
    wanted = set(names) if names else None
    controllers = []

    for name, obj in vars(module).items():
        if not inspect.isclass(obj) or obj.__module__ != module.__name__:
            continue
        if wanted is not None and name not in wanted:
            continue
        if ROUTE_MAPPING_ATTR in vars(obj) or any(
            _is_mapped(member) for member in _handlers(obj)
        ):
            controllers.append(obj)

    return controllers


def _handlers(controller: type) -> list[Callable[..., Any]]:
    handlers = []
    for member in vars(controller).values():
        if isinstance(member, (staticmethod, classmethod)):
            member = member.__func__
        if inspect.isfunction(member):
            handlers.append(member)
    return handlers


class DocScanner:
    """
    Produce merged documentation for controllers.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        """
        Initialize the scanner.

        Args:
            config: Configuration; defaults are used when omitted.
        """
        self.config = config or Config()
        wrapper_types = self.config.merge.wrapper_types
        self.reflection_provider = ReflectionMetadataProvider(wrapper_types)
        self.reflection_merger = DocMerger(self.reflection_provider)
        self.table_merger = DocMerger(TableMetadataProvider(wrapper_types))

    def scan_controllers(self, controllers: Iterable[type]) -> list[ApiDoc]:
        """
        Document live controller classes.

        Args:
            controllers: Controller classes decorated with ``request_mapping``.

        Returns:
            One ApiDoc per controller, listing its mapped handlers.
        """
        docs = []
        for controller in controllers:
            api_doc = ApiDoc(name=controller.__name__, description=_summary(controller))
            api_doc = self.reflection_merger.merge_api_doc(controller, api_doc)

            for handler in _handlers(controller):
                if not _is_mapped(handler):
                    continue
                if handler.__name__.startswith("_") and not self.config.scanner.include_private:
                    continue
                baseline = self._baseline_from_handler(handler)
                api_doc.methods.append(
                    self.reflection_merger.merge_api_method_doc(handler, controller, baseline)
                )

            log.debug("Documented %s with %d endpoint(s)", api_doc.name, len(api_doc.methods))
            docs.append(api_doc)
        return docs

    def _baseline_from_handler(self, handler: Callable[..., Any]) -> ApiMethodDoc:
        provider = self.reflection_provider
        hints = provider.type_hints(handler)
        bindings = provider.parameter_bindings(handler)

        method_doc = ApiMethodDoc(
            description=_summary(handler),
            response=ApiResponseObjectDoc(
                jsondoc_type=JSONDocType.from_annotation(hints.get("return", Any))
            ),
        )

        for index, parameter in enumerate(provider.declared_parameters(handler)):
            has_default = parameter.default is not inspect.Parameter.empty
            param_doc = ApiParamDoc(
                name=parameter.name,
                jsondoc_type=JSONDocType.from_annotation(hints.get(parameter.name, Any)),
                required="false" if has_default else "true",
                default_value=(
                    str(parameter.default)
                    if has_default and parameter.default is not None
                    else None
                ),
            )
            kinds = {binding.kind for binding in bindings[index]}
            if "path" in kinds:
                method_doc.path_parameters.append(
                    self.reflection_merger.merge_api_path_param_doc(handler, index, param_doc)
                )
            if "query" in kinds:
                method_doc.query_parameters.append(
                    self.reflection_merger.merge_api_query_param_doc(handler, index, param_doc)
                )

        return method_doc

    def scan_table(self, table: MetadataTable) -> list[ApiDoc]:
        """
        Document the controllers listed in a metadata table.

        Every listed method is documented, starting from its baseline record.

        Args:
            table: The metadata table.

        Returns:
            One ApiDoc per table controller.
        """
        docs = []
        for controller in table.controllers:
            api_doc = ApiDoc(name=controller.name, description=controller.description)
            api_doc = self.table_merger.merge_api_doc(controller, api_doc)
            api_doc.methods = [
                self._merge_table_method(method, controller)
                for method in controller.methods
            ]
            docs.append(api_doc)
        return docs

    def _merge_table_method(self, method: TableMethod, controller: TableController) -> ApiMethodDoc:
        baseline = method.doc.model_copy(deep=True)

        for index, parameter in enumerate(method.parameters):
            if parameter.doc is None:
                continue
            kinds = {binding.kind for binding in parameter.bindings}
            if "path" in kinds:
                baseline.path_parameters.append(
                    self.table_merger.merge_api_path_param_doc(method, index, parameter.doc)
                )
            if "query" in kinds:
                baseline.query_parameters.append(
                    self.table_merger.merge_api_query_param_doc(method, index, parameter.doc)
                )

        return self.table_merger.merge_api_method_doc(method, controller, baseline)
