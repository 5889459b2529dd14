"""
Field mergers.

One resolution function per documented field. Each reads the route mapping
declared on the controller and on the handler method (either may be None)
and returns the effective value. The functions share no state and can be
called in any order.
"""

from typing import Optional

from endpoint_doc_merger.models.doc import ApiHeaderDoc, ApiParamDoc, ApiVerb
from endpoint_doc_merger.models.metadata import ParameterBindings, RouteMapping, find_binding


def merge_path(
    controller: Optional[RouteMapping],
    method: Optional[RouteMapping],
) -> str:
    """
    Resolve the path of an endpoint.

    The first controller path and the first method path are concatenated
    as they are, without adding or removing slashes.

    Args:
        controller: Mapping declared on the controller.
        method: Mapping declared on the handler method.

    Returns:
        The concatenated path, possibly empty.
    """
    path = ""
    if controller is not None and controller.value:
        path += controller.value[0]
    if method is not None and method.value:
        path += method.value[0]
    return path


def merge_verb(
    controller: Optional[RouteMapping],
    method: Optional[RouteMapping],
) -> ApiVerb:
    """
    Resolve the HTTP verb of an endpoint.

    Only the first declared verb of a mapping is considered. The method's
    verb overrides the controller's; GET is used when neither declares one.

    Raises:
        UnsupportedVerbError: If the winning verb token is not a known verb.
    """
    token = None
    if controller is not None and controller.method:
        token = controller.method[0]
    if method is not None and method.method:
        token = method.method[0]

    if token is None:
        return ApiVerb.GET
    return ApiVerb.parse(token)


def _ordered_unique(values: tuple[str, ...]) -> list[str]:
    return list(dict.fromkeys(values))


def merge_produces(
    controller: Optional[RouteMapping],
    method: Optional[RouteMapping],
) -> list[str]:
    """
    Resolve the produced media types.

    Media types declared on the method replace the controller's entirely.
    """
    produces: list[str] = []
    if controller is not None and controller.produces:
        produces = _ordered_unique(controller.produces)
    if method is not None and method.produces:
        produces = _ordered_unique(method.produces)
    return produces


def merge_consumes(
    controller: Optional[RouteMapping],
    method: Optional[RouteMapping],
) -> list[str]:
    """
    Resolve the consumed media types.

    Media types declared on the method replace the controller's entirely.
    """
    consumes: list[str] = []
    if controller is not None and controller.consumes:
        consumes = _ordered_unique(controller.consumes)
    if method is not None and method.consumes:
        consumes = _ordered_unique(method.consumes)
    return consumes


def _header_docs(constraints: tuple[str, ...]) -> list[ApiHeaderDoc]:
    names = _ordered_unique(tuple(constraint.split("=", 1)[0] for constraint in constraints))
    return [ApiHeaderDoc(name=name) for name in names]


def merge_headers(
    controller: Optional[RouteMapping],
    method: Optional[RouteMapping],
) -> list[ApiHeaderDoc]:
    """
    Resolve the names of the headers an endpoint requires.

    Each constraint is ``"name=value"`` or a bare ``"name"``; only the name
    is documented. Constraints declared on the method discard the
    controller's.
    """
    headers: list[ApiHeaderDoc] = []
    if controller is not None and controller.headers:
        headers = _header_docs(controller.headers)
    if method is not None and method.headers:
        headers = _header_docs(method.headers)
    return headers


def merge_path_param_name(bindings: ParameterBindings, param_doc: ApiParamDoc) -> ApiParamDoc:
    """
    Apply a path-variable binding to a parameter's documentation.

    Only the path-variable binding among ``bindings`` is examined. The
    documented name is replaced only by an explicit, non-empty name.

    Returns:
        An updated copy of ``param_doc``.
    """
    binding = find_binding(bindings, "path")
    if binding.kind == "path" and binding.name:
        return param_doc.model_copy(update={"name": binding.name})
    return param_doc.model_copy()


def merge_query_param(bindings: ParameterBindings, param_doc: ApiParamDoc) -> ApiParamDoc:
    """
    Apply a query-parameter binding to a parameter's documentation.

    Only the query-parameter binding among ``bindings`` is examined. An
    explicit name replaces the documented name, the required flag is
    always taken from the binding and a declared default value replaces
    the documented one.

    Returns:
        An updated copy of ``param_doc``.
    """
    binding = find_binding(bindings, "query")
    if binding.kind != "query":
        return param_doc.model_copy()

    update: dict[str, Optional[str]] = {"required": str(binding.required).lower()}
    if binding.name:
        update["name"] = binding.name
    if binding.default_value is not None:
        update["default_value"] = binding.default_value
    return param_doc.model_copy(update=update)
