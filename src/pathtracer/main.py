# main.py
import argparse
import os
import random
import sys
from pathtracer.camera.camera import Camera
from pathtracer.renderer.image_writer import save_image, write_ppm_ascii
from pathtracer.renderer.raytracer import EXECUTORS, Renderer
from pathtracer.renderer.shading import MAX_DEPTH
from pathtracer.scenes import SCENES

QUALITY_LEVELS = {
    "preview": {"samples": 4},
    "balanced": {"samples": 32},
    "final": {"samples": 100},
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathtracer", description="Render a sphere scene by path tracing.")
    parser.add_argument("--scene", choices=sorted(SCENES), default="random")
    parser.add_argument("--width", type=int, default=200)
    parser.add_argument("--height", type=int, default=100)
    samples = parser.add_mutually_exclusive_group()
    samples.add_argument("--samples", type=int, help="samples per pixel")
    samples.add_argument("--quality", choices=list(QUALITY_LEVELS), default="final")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH)
    parser.add_argument("--workers", type=int, default=None, help="defaults to the CPU count")
    parser.add_argument("--executor", choices=sorted(EXECUTORS), default="process")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", default="output.png",
                        help="image path; a .txt.ppm suffix writes plain-text PPM")
    parser.add_argument("--preview", action="store_true", help="show the image in a window when done")
    parser.add_argument("--debug", action="store_true", help="fail on degenerate samples instead of skipping them")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    samples = args.samples if args.samples is not None else QUALITY_LEVELS[args.quality]["samples"]

    try:
        renderer = Renderer(args.width, args.height, samples_per_pixel=samples,
                            max_depth=args.max_depth, workers=args.workers,
                            executor=args.executor, seed=args.seed, debug_mode=args.debug)

        scene_rng = random.Random(args.seed)
        world, configuration = SCENES[args.scene](args.width / args.height, scene_rng)
        camera = Camera(configuration)

        print("\n=== Creating World ===")
        print(f"Scene: {args.scene}")
        print(f"World contains {len(world)} objects")
        print(f"Camera position: {configuration.look_from}")

        image = renderer.render(camera, world)

        if args.output.endswith(".txt.ppm"):
            write_ppm_ascii(image, args.output)
        else:
            save_image(image, args.output)
        print(f"Saved {os.path.abspath(args.output)}")
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.preview:
        from pathtracer.renderer.preview import show_preview
        show_preview(image, title=f"Path Tracer - {args.scene}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
