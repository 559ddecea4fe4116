"""Draw a glyph scene with one OpenGL program per material."""

from __future__ import annotations

import ctypes
import time
from dataclasses import dataclass

import numpy as np
from OpenGL.GL import (GL_ARRAY_BUFFER, GL_BACK, GL_BLEND, GL_COLOR_BUFFER_BIT,
                       GL_COMPILE_STATUS, GL_CULL_FACE, GL_DEPTH_BUFFER_BIT,
                       GL_DEPTH_TEST, GL_FALSE, GL_FLOAT, GL_FRAGMENT_SHADER,
                       GL_LINK_STATUS, GL_ONE_MINUS_SRC_ALPHA, GL_SRC_ALPHA,
                       GL_STATIC_DRAW, GL_TRIANGLES, GL_TRUE, GL_VERTEX_SHADER,
                       glAttachShader, glBindBuffer, glBlendFunc,
                       glBufferData, glClear, glClearColor, glCompileShader,
                       glCreateProgram, glCreateShader, glCullFace,
                       glDeleteShader, glDepthMask, glDisable,
                       glDisableVertexAttribArray, glDrawArrays, glEnable,
                       glEnableVertexAttribArray, glGenBuffers,
                       glGetAttribLocation, glGetProgramInfoLog,
                       glGetProgramiv, glGetShaderInfoLog, glGetShaderiv,
                       glGetUniformLocation, glLinkProgram, glShaderSource,
                       glUniform1f, glUniform3f, glUniformMatrix3fv,
                       glUniformMatrix4fv, glUseProgram, glVertexAttribPointer,
                       glViewport)

from glyphglow.scene.geometry import FLOATS_PER_VERTEX, Mesh
from glyphglow.scene.objects import Scene, SceneObject
from glyphglow.scene.transforms import normal_matrix
from glyphglow.shading.materials import Material, UniformValue
from glyphglow.shading.programs import NORMAL_ATTRIBUTE, POSITION_ATTRIBUTE
from glyphglow.utilities.logging import get_logger

logger = get_logger(__name__)

CLEAR_COLOR = (0.0, 0.0, 0.0, 1.0)
MODEL_VIEW_UNIFORM = "modelViewMatrix"
PROJECTION_UNIFORM = "projectionMatrix"
NORMAL_MATRIX_UNIFORM = "normalMatrix"
_FLOAT_BYTES = 4
_VERTEX_STRIDE = FLOATS_PER_VERTEX * _FLOAT_BYTES
_NORMAL_OFFSET = 3 * _FLOAT_BYTES


@dataclass
class _Program:
    handle: int
    uniform_locations: dict[str, int]
    position_location: int
    normal_location: int


@dataclass
class _MeshBuffer:
    handle: int
    vertex_count: int


def _decode_log(log: bytes | str) -> str:
    if isinstance(log, bytes):
        return log.decode("utf-8", errors="replace")
    return log


class SceneRenderer:
    def __init__(self) -> None:
        self._programs: dict[int, _Program] = {}
        self._buffers: dict[int, _MeshBuffer] = {}
        self.initialized = False

    def initialize(self) -> None:
        glEnable(GL_DEPTH_TEST)
        # Outward faces wind counter-clockwise; hide the far side of the glow
        glEnable(GL_CULL_FACE)
        glCullFace(GL_BACK)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glClearColor(*CLEAR_COLOR)
        self.initialized = True

    def _compile_shader(self, source: str, shader_type: int) -> int:
        shader = glCreateShader(shader_type)
        glShaderSource(shader, source)
        glCompileShader(shader)
        compile_status = glGetShaderiv(shader, GL_COMPILE_STATUS)
        if not compile_status:
            info = _decode_log(glGetShaderInfoLog(shader))
            glDeleteShader(shader)
            raise RuntimeError(f"Shader compilation failed: {info}")
        return shader

    def _link_program(self, material: Material) -> _Program:
        logger.info("Compiling program for material %s", material.name)
        vertex_shader = self._compile_shader(material.vertex_shader, GL_VERTEX_SHADER)
        fragment_shader = self._compile_shader(
            material.fragment_shader, GL_FRAGMENT_SHADER
        )

        program = glCreateProgram()
        glAttachShader(program, vertex_shader)
        glAttachShader(program, fragment_shader)
        glLinkProgram(program)

        link_status = glGetProgramiv(program, GL_LINK_STATUS)
        glDeleteShader(vertex_shader)
        glDeleteShader(fragment_shader)
        if not link_status:
            info = _decode_log(glGetProgramInfoLog(program))
            raise RuntimeError(f"Shader link failed for {material.name}: {info}")

        names = [MODEL_VIEW_UNIFORM, PROJECTION_UNIFORM, NORMAL_MATRIX_UNIFORM]
        names.extend(material.uniforms)
        return _Program(
            handle=program,
            uniform_locations={
                name: glGetUniformLocation(program, name) for name in names
            },
            position_location=glGetAttribLocation(program, POSITION_ATTRIBUTE),
            normal_location=glGetAttribLocation(program, NORMAL_ATTRIBUTE),
        )

    def _upload_mesh(self, mesh: Mesh) -> _MeshBuffer:
        vertices = mesh.interleaved()
        handle = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, handle)
        glBufferData(GL_ARRAY_BUFFER, vertices.nbytes, vertices, GL_STATIC_DRAW)
        return _MeshBuffer(handle=handle, vertex_count=mesh.vertex_count)

    def prepare(self, scene: Scene) -> None:
        """Compile every material and upload every mesh of ``scene`` once."""
        if not self.initialized:
            self.initialize()
        for material in scene.materials():
            if id(material) not in self._programs:
                self._programs[id(material)] = self._link_program(material)
        for scene_object in scene.objects:
            if id(scene_object.mesh) not in self._buffers:
                self._buffers[id(scene_object.mesh)] = self._upload_mesh(
                    scene_object.mesh
                )

    def clear(self) -> None:
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

    @staticmethod
    def _set_uniform(location: int, value: UniformValue) -> None:
        if location < 0:
            # Declared but unused uniforms are optimised away by the driver
            return
        if isinstance(value, tuple):
            glUniform3f(location, *(float(component) for component in value))
        else:
            glUniform1f(location, float(value))

    @staticmethod
    def _set_matrix(location: int, matrix: np.ndarray) -> None:
        if location < 0:
            return
        # numpy matrices are row-major; GL expects column-major
        data = np.ascontiguousarray(matrix.T, dtype=np.float32)
        if matrix.shape == (4, 4):
            glUniformMatrix4fv(location, 1, GL_FALSE, data)
        else:
            glUniformMatrix3fv(location, 1, GL_FALSE, data)

    def _bind_attributes(self, program: _Program, buffer: _MeshBuffer) -> list[int]:
        glBindBuffer(GL_ARRAY_BUFFER, buffer.handle)
        enabled = []
        for location, offset in (
            (program.position_location, 0),
            (program.normal_location, _NORMAL_OFFSET),
        ):
            if location < 0:
                continue
            glEnableVertexAttribArray(location)
            glVertexAttribPointer(
                location, 3, GL_FLOAT, GL_FALSE, _VERTEX_STRIDE, ctypes.c_void_p(offset)
            )
            enabled.append(location)
        return enabled

    def _draw_object(
        self,
        scene_object: SceneObject,
        view: np.ndarray,
        projection: np.ndarray,
    ) -> None:
        material = scene_object.material
        try:
            program = self._programs[id(material)]
            buffer = self._buffers[id(scene_object.mesh)]
        except KeyError as exc:
            raise RuntimeError(
                f"Scene object {scene_object.name!r} was not prepared for rendering"
            ) from exc

        model_view = view @ scene_object.model_matrix()
        locations = program.uniform_locations

        glUseProgram(program.handle)
        self._set_matrix(locations[MODEL_VIEW_UNIFORM], model_view)
        self._set_matrix(locations[PROJECTION_UNIFORM], projection)
        self._set_matrix(locations[NORMAL_MATRIX_UNIFORM], normal_matrix(model_view))
        for name, value in material.uniforms.items():
            self._set_uniform(locations[name], value)

        if material.transparent:
            glEnable(GL_BLEND)
            glDepthMask(GL_FALSE)

        enabled = self._bind_attributes(program, buffer)
        glDrawArrays(GL_TRIANGLES, 0, buffer.vertex_count)
        for location in enabled:
            glDisableVertexAttribArray(location)

        if material.transparent:
            glDepthMask(GL_TRUE)
            glDisable(GL_BLEND)

    def render(self, scene: Scene, viewport_size: tuple[int, int]) -> None:
        start_ns = time.perf_counter_ns()
        width, height = viewport_size
        glViewport(0, 0, width, height)
        self.clear()

        view = scene.camera.view_matrix()
        projection = scene.camera.projection_matrix()
        for scene_object in scene.draw_order():
            self._draw_object(scene_object, view, projection)

        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        logger.debug(
            "renderer.frame",
            extra={"objects": len(scene.objects), "duration_ms": duration_ms},
        )
