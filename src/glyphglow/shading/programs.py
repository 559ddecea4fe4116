"""GLSL sources for the glyph and glow materials.

Every program receives ``modelViewMatrix``, ``projectionMatrix`` and
``normalMatrix`` from the renderer. Lighting happens in view space.
"""

from string import Template

POSITION_ATTRIBUTE = "position"
NORMAL_ATTRIBUTE = "normal"

LIT_VERT_SHADER = """
#version 120

attribute vec3 position;
attribute vec3 normal;

uniform mat4 modelViewMatrix;
uniform mat4 projectionMatrix;
uniform mat3 normalMatrix;

varying vec3 vNormal;
varying vec3 vPosition;

void main() {
    vNormal = normalize(normalMatrix * normal);
    vec4 viewPosition = modelViewMatrix * vec4(position, 1.0);
    vPosition = viewPosition.xyz;
    gl_Position = projectionMatrix * viewPosition;
}
"""

FLAT_VERT_SHADER = """
#version 120

attribute vec3 position;

uniform mat4 modelViewMatrix;
uniform mat4 projectionMatrix;

void main() {
    gl_Position = projectionMatrix * modelViewMatrix * vec4(position, 1.0);
}
"""

GRADIENT_VERT_SHADER = """
#version 120

attribute vec3 position;

uniform mat4 modelViewMatrix;
uniform mat4 projectionMatrix;

varying vec3 vLocalPosition;

void main() {
    vLocalPosition = position;
    gl_Position = projectionMatrix * modelViewMatrix * vec4(position, 1.0);
}
"""

GLOW_VERT_SHADER = """
#version 120

attribute vec3 position;
attribute vec3 normal;

uniform mat4 modelViewMatrix;
uniform mat4 projectionMatrix;
uniform mat3 normalMatrix;

varying vec3 vNormal;

void main() {
    vNormal = normalize(normalMatrix * normal);
    gl_Position = projectionMatrix * modelViewMatrix * vec4(position, 1.0);
}
"""

FLAT_FRAG_SHADER = """
#version 120

uniform vec3 color;

void main() {
    gl_FragColor = vec4(color, 1.0);
}
"""

GRADIENT_FRAG_SHADER = """
#version 120

varying vec3 vLocalPosition;

void main() {
    gl_FragColor = vec4(vLocalPosition * 0.5 + 0.5, 1.0);
}
"""

PHONG_REFLECT_FRAG_TEMPLATE = Template("""
#version 120

uniform vec3 color;
uniform vec3 lightPosition;
uniform float ambientIntensity;

varying vec3 vNormal;
varying vec3 vPosition;

void main() {
    vec3 normal = normalize(vNormal);
    vec3 ambient = ambientIntensity * color;

    vec3 lightDir = normalize(lightPosition - vPosition);
    float diff = max(dot(normal, lightDir), 0.0);
    vec3 diffuse = diff * color;

    vec3 viewDir = normalize(-vPosition);
    vec3 reflectDir = reflect(-lightDir, normal);
    float spec = pow(max(dot(viewDir, reflectDir), 0.0), $shininess);
    vec3 specular = vec3($specular_strength) * spec;

    gl_FragColor = vec4(ambient + diffuse + specular, 1.0);
}
""")

PHONG_HALF_VECTOR_FRAG_TEMPLATE = Template("""
#version 120

uniform vec3 color;
uniform vec3 lightPosition;
uniform float ambientIntensity;

varying vec3 vNormal;
varying vec3 vPosition;

void main() {
    vec3 normal = normalize(vNormal);
    vec3 ambient = ambientIntensity * color;

    vec3 lightDir = normalize(lightPosition - vPosition);
    float diff = max(dot(normal, lightDir), 0.0);
    vec3 diffuse = diff * color;

    vec3 viewDir = normalize(-vPosition);
    vec3 halfDir = normalize(lightDir + viewDir);
    float spec = pow(max(dot(normal, halfDir), 0.0), $shininess);
    vec3 specular = color * spec;

    gl_FragColor = vec4(ambient + diffuse + specular, 1.0);
}
""")

RIM_GLOW_FRAG_TEMPLATE = Template("""
#version 120

uniform float time;

varying vec3 vNormal;

void main() {
    // pow() is undefined for a negative base
    float rim = max(0.5 - dot(normalize(vNormal), vec3(0.0, 0.0, 1.0)), 0.0);
    float intensity = pow(rim, $falloff_power);
    vec3 glow = vec3($glow_brightness) * intensity;
    gl_FragColor = vec4(glow, $base_alpha + $alpha_amplitude * sin(time));
}
""")


def glsl_float(value: float) -> str:
    """Format ``value`` as a GLSL float literal."""
    return f"{float(value):.6f}"
