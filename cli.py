import argparse
import logging
import sys
import time

from errors import RaytracerError
from ray import render_image
from scenes import FourSpheresExample, parse_scene_file

logger = logging.getLogger(__name__)


def render(scene_def, width, height, output_path=None, show=False):
    """Render scene_def into a width x height frame, then save and/or display it."""
    start = time.time()
    scene = scene_def.build(width, height)
    image = render_image(scene, width, height)
    logger.info("rendered in %.1fs", time.time() - start)
    if output_path is not None:
        image.writeToFile(output_path)
        print(f"Image saved to {output_path}")
    if show:
        image.show(title="trace_ray")
    return image


def main(argv=None):
    parser = argparse.ArgumentParser(description='Sphere ray tracer')
    parser.add_argument('scene_file', type=str, nargs='?', default=None,
                        help='Path to a scene file (default: the built-in four spheres scene)')
    parser.add_argument('-o', '--output', type=str, default='render.png', help='Output image file')
    parser.add_argument('--width', type=int, default=768, help='Image width')
    parser.add_argument('--height', type=int, default=768, help='Image height')
    parser.add_argument('--depth', type=int, default=None,
                        help='Reflection depth (overrides the scene file)')
    parser.add_argument('--show', action='store_true', help='Display the frame when done')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log every rendered row')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        if args.scene_file is None:
            scene_def = FourSpheresExample()
        else:
            with open(args.scene_file, 'r') as f:
                scene_def = parse_scene_file(f)
        if args.depth is not None:
            scene_def.max_depth = args.depth
        render(scene_def, args.width, args.height, output_path=args.output, show=args.show)
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1
    except RaytracerError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
