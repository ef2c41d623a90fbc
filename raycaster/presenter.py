"""
OpenGL frame presenter: streams the software-rendered RGBA buffer into a
texture and draws it over the whole window.
"""

from __future__ import annotations
import logging
from typing import List

try:
    import OpenGL.GL as gl  # noqa: N811
except ImportError:
    raise ImportError(
        "PyOpenGL is required to present frames. "
        "Please install via: pip install PyOpenGL"
    )

logger = logging.getLogger(__name__)


def setup_opengl(width: int, height: int) -> None:
    """Configure GL state for drawing a single full-screen texture."""
    gl.glViewport(0, 0, width, height)
    gl.glDisable(gl.GL_DEPTH_TEST)
    gl.glDisable(gl.GL_BLEND)
    gl.glEnable(gl.GL_TEXTURE_2D)
    gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)


def check_gl_error(context: str) -> None:
    """Raise RuntimeError if GL reported an error during `context`."""
    err = gl.glGetError()
    if err != gl.GL_NO_ERROR:
        logger.error("GL error 0x%04x during %s", err, context)
        raise RuntimeError(f"OpenGL error 0x{err:04x} during {context}")


class FramePresenter:
    """Owns the frame texture; call present() once per frame, then flip."""

    def __init__(self, width: int, height: int) -> None:
        self.w = width
        self.h = height
        # Textures created here and released in shutdown()
        self._textures: List[int] = []
        setup_opengl(self.w, self.h)
        self.texture = self._create_texture()
        check_gl_error("frame texture creation")
        logger.info("Frame presenter ready (%dx%d)", self.w, self.h)

    def _create_texture(self) -> int:
        tex = gl.glGenTextures(1)
        self._textures.append(tex)
        gl.glBindTexture(gl.GL_TEXTURE_2D, tex)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_NEAREST)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_NEAREST)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE)
        gl.glTexImage2D(
            gl.GL_TEXTURE_2D,
            0,
            gl.GL_RGBA,
            self.w,
            self.h,
            0,
            gl.GL_RGBA,
            gl.GL_UNSIGNED_BYTE,
            None,
        )
        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        return tex

    def present(self, frame) -> None:
        """Upload `frame` (row 0 at the top) and draw it full screen."""
        gl.glClear(gl.GL_COLOR_BUFFER_BIT)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.texture)
        gl.glTexSubImage2D(
            gl.GL_TEXTURE_2D,
            0,
            0,
            0,
            self.w,
            self.h,
            gl.GL_RGBA,
            gl.GL_UNSIGNED_BYTE,
            bytes(frame),
        )
        # Texture row 0 is the top of the image, so v runs downwards
        gl.glBegin(gl.GL_QUADS)
        gl.glTexCoord2f(0.0, 1.0)
        gl.glVertex2f(-1.0, -1.0)
        gl.glTexCoord2f(1.0, 1.0)
        gl.glVertex2f(1.0, -1.0)
        gl.glTexCoord2f(1.0, 0.0)
        gl.glVertex2f(1.0, 1.0)
        gl.glTexCoord2f(0.0, 0.0)
        gl.glVertex2f(-1.0, 1.0)
        gl.glEnd()
        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)

    def shutdown(self) -> None:
        """Call at program exit **WITH A VALID GL CONTEXT**."""
        for tex in self._textures:
            gl.glDeleteTextures(1, [tex])
        self._textures.clear()
