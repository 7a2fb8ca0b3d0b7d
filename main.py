# main.py
import argparse
import os

from PIL import Image

from raytracer import config
from raytracer.camera import PerspectiveCamera
from raytracer.color import grey, rgb
from raytracer.logging_config import setup_logging
from raytracer.material import GLASS, MIRROR, Material
from raytracer.primitives import DirectionalLight, Plane, PointLight, Sphere
from raytracer.render import Renderer, RenderSettings
from raytracer.scene import Scene
from raytracer.texture import Texture

# ---------------- Scene ----------------
def build_scene(texture_path=None):
    scene = Scene(background=rgb(0.02, 0.02, 0.03))

    if texture_path:
        floor_map = Texture.from_image(texture_path)
    else:
        floor_map = Texture.checkerboard(2, 2, 64, grey(0.8), grey(0.1))
    floor = Material(diffuse_map=floor_map, tiling=(0.5, 0.5), specular=grey(0.2), shininess=10.0)

    scene.add(
        Sphere([0.0, -0.2, 4.0], 0.8, Material(diffuse=rgb(0.86, 0.24, 0.24), shininess=100.0, reflectivity=0.1)),
        Sphere([1.6, 0.2, 5.0], 0.9, MIRROR),
        Sphere([-1.4, -0.3, 3.2], 0.7, GLASS),
        Sphere([-1.8, 0.0, 6.5], 1.0, Material(diffuse=rgb(0.24, 0.78, 0.47), shininess=30.0)),
        Plane([0.0, -1.0, 0.0], [0.0, 1.0, 0.0], floor),
    )
    # Intensities are radiant power; the inverse square law divides by 4*pi*d^2
    scene.add(
        PointLight([2.0, 3.0, 1.0], rgb(1.0, 0.95, 0.9), 400.0),
        PointLight([-3.0, 5.0, 0.0], rgb(0.8, 0.85, 1.0), 250.0),
        DirectionalLight([0.2, -1.0, 0.5], grey(1.0), 0.3),
    )
    return scene

# ---------------- Rendering ----------------
def render(width, height, samples_per_axis, max_depth, out_path, texture_path=None, exposure=None, gamma=None):
    scene = build_scene(texture_path)
    camera = PerspectiveCamera(
        fov=0.4,
        aspect_ratio=width / height,
        exposure=config.RENDER_EXPOSURE if exposure is None else exposure,
        gamma=config.RENDER_GAMMA if gamma is None else gamma,
    )
    settings = RenderSettings(width=width, height=height, samples_per_axis=samples_per_axis, max_depth=max_depth)

    with Renderer(scene, camera, settings) as renderer:
        pixels = renderer.render()

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    Image.fromarray(pixels).save(out_path)
    print(f"Saved: {out_path}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render the demo scene to an image file")
    parser.add_argument("--width", type=int, default=config.RENDER_WIDTH)
    parser.add_argument("--height", type=int, default=config.RENDER_HEIGHT)
    parser.add_argument("--samples", type=int, default=config.RENDER_SAMPLES_PER_AXIS, help="samples per pixel axis")
    parser.add_argument("--depth", type=int, default=config.RENDER_MAX_DEPTH, help="maximum reflection/refraction depth")
    parser.add_argument("--exposure", type=float, default=config.RENDER_EXPOSURE)
    parser.add_argument("--gamma", type=float, default=config.RENDER_GAMMA)
    parser.add_argument("--texture", default=None, help="image to use as the floor texture")
    parser.add_argument("--output", default=str(config.OUTPUT_DIR / "final_ray_tracer.png"))
    args = parser.parse_args(argv)

    setup_logging()
    render(args.width, args.height, args.samples, args.depth, args.output, args.texture, args.exposure, args.gamma)


if __name__ == "__main__":
    main()
