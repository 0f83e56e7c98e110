"""Reactive components rendered inside panel modals."""

from .response_modal import AiResponseModal, split_chunks

__all__ = ["AiResponseModal", "split_chunks"]
