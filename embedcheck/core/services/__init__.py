"""Application services built on the validation core."""

from .editor_session import EmbedEditorSession

__all__ = ["EmbedEditorSession"]
