"""Call-stack capture shared by the sink adapters."""

from __future__ import annotations

import traceback

_OWN_FRAMES = 2
# ``capture_caller_stack`` itself plus the ``capture_stack`` method calling it.


def capture_caller_stack(offset: int) -> str:
    """Return the formatted stack, omitting ``offset`` frames above the sink.

    Frame counting starts with the function that invoked the sink's
    ``capture_stack``; ``offset=0`` keeps that function as the innermost
    frame.
    """

    frames = traceback.extract_stack()
    keep = len(frames) - (_OWN_FRAMES + max(offset, 0))
    return "".join(traceback.format_list(frames[: max(keep, 0)]))


class StackCaptureMixin:
    """Provide :meth:`capture_stack` for sinks with no stack source of their own."""

    def capture_stack(self, offset: int) -> str:
        return capture_caller_stack(offset)


__all__ = ["StackCaptureMixin", "capture_caller_stack"]
