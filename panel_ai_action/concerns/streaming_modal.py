"""Streaming modal hooks for panel actions.

Mix HasStreamingModal in alongside HasAgentConfiguration on actions whose
result is shown through AiResponseModal. The modal calls these hooks
during its lifecycle.
"""

__all__ = ["HasStreamingModal"]


class HasStreamingModal:
    """Lifecycle hooks called by AiResponseModal."""

    def mount_streaming_modal(self) -> None:
        """Called when the response modal mounts, before the agent runs.

        Override to perform setup before streaming begins.
        """

    def stream_chunk(self, chunk: str) -> str:
        """Called for every streamed chunk; the returned text is displayed.

        Override to intercept or transform chunks.
        """
        return chunk
