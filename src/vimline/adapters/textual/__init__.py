"""Line-editor bridge and the Textual demo host."""

from .controller import LineEditorAdapter, LineEditorHooks, LineSnapshot

__all__ = ["LineEditorAdapter", "LineEditorHooks", "LineSnapshot"]
