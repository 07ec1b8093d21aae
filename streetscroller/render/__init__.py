"""
Rendering collaborators for the scroll view.

Components:
- AddressLabelFactory: Renders the street address label used as tile content
- FrameCompositor: Builds the viewport image from placed tiles
- RenderPipeline: Frame loop standing in for the host scroll container
"""

from streetscroller.render.label_renderer import AddressLabelFactory
from streetscroller.render.frame_compositor import FrameCompositor
from streetscroller.render.render_pipeline import RenderPipeline

__all__ = [
    'AddressLabelFactory',
    'FrameCompositor',
    'RenderPipeline',
]
