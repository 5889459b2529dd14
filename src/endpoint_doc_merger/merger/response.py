"""
Response shape adjustment.

A response envelope only carries status and headers around the real body,
so its own name is dropped from the documented response type.
"""

from typing import Optional

from endpoint_doc_merger.models.doc import ApiResponseObjectDoc


def adjust_response(
    returns_envelope: bool,
    response: Optional[ApiResponseObjectDoc],
) -> Optional[ApiResponseObjectDoc]:
    """
    Strip the envelope layer from a response type.

    Args:
        returns_envelope: Whether the handler's return type is a wrapper type.
        response: The response documentation computed from that return type.

    Returns:
        A copy of ``response`` with the outermost type token removed when
        the handler returns an envelope, otherwise ``response`` unchanged.
    """
    if response is None or not returns_envelope:
        return response

    return response.model_copy(
        update={"jsondoc_type": response.jsondoc_type.without_outermost()}
    )
