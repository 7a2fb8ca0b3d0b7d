"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from raytracer.camera import PerspectiveCamera  # noqa: E402
from raytracer.color import BLACK, WHITE, grey  # noqa: E402
from raytracer.primitives import PointLight, Sphere  # noqa: E402
from raytracer.scene import Scene  # noqa: E402
from raytracer.texture import Texture  # noqa: E402


@pytest.fixture
def camera():
    """Camera at the origin looking down +z."""
    return PerspectiveCamera()


@pytest.fixture
def lit_sphere_scene():
    """Unit sphere four units ahead of the origin, lit from above."""
    scene = Scene()
    scene.add(Sphere([0.0, 0.0, 4.0], 1.0))
    scene.add(PointLight([0.0, 4.0, 0.0], WHITE, 100.0))
    return scene


@pytest.fixture
def checkerboard():
    """2x2 checkerboard of 4x4 texel blocks, white in the top-left corner."""
    return Texture.checkerboard(2, 2, 4, WHITE, BLACK)


@pytest.fixture
def flat_normal_map():
    """Normal map whose every texel encodes the unperturbed normal."""
    return Texture.from_array([[[0.5, 0.5, 1.0]] * 4] * 4)


@pytest.fixture
def mid_grey():
    return grey(0.5)
