# main.py
"""Command line entry point: render one of the bundled scenes to a PNG.

Usage
-----
    pathtracer --scene two-spheres --quality preview
    pathtracer --scene random --width 400 --samples 64 --bvh-stats
    pathtracer --scene showcase --shading normals --output out/normals.png
"""
import argparse
import logging
import sys
from typing import Optional, Sequence
from tqdm import tqdm
from pathtracer.config import EXECUTORS, QUALITY_PRESETS, SHADINGS, RenderSettings
from pathtracer.geometry.bvh import bvh_stats
from pathtracer.renderer.image_output import TONE_MAPPERS, save_image
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scenes import SCENES

logger = logging.getLogger("pathtracer")

def setup_logging(level: str = "INFO") -> None:
    """Configure structured logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(name)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Offline path tracer for sphere scenes",
    )
    parser.add_argument("--scene", choices=sorted(SCENES), default="two-spheres",
                        help="Scene to render (default: two-spheres)")
    parser.add_argument("--quality", choices=sorted(QUALITY_PRESETS), default="preview",
                        help="Quality preset (default: preview)")
    parser.add_argument("--width", type=int, default=None,
                        help="Image width in pixels (default: from preset)")
    parser.add_argument("--aspect-ratio", type=float, default=16.0 / 9.0,
                        help="Width / height (default: 16/9)")
    parser.add_argument("--samples", type=int, default=None,
                        help="Samples per pixel (default: from preset)")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="Bounce cap per path (default: from preset)")
    parser.add_argument("--batch-rows", type=int, default=10,
                        help="Rows per render band (default: 10)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker pool size (default: CPU count)")
    parser.add_argument("--executor", choices=EXECUTORS, default="process",
                        help="Worker pool kind; threads share one interpreter lock "
                             "(default: process)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for reproducible sampling (default: OS entropy)")
    parser.add_argument("--no-bvh", action="store_true", default=False,
                        help="Search the scene linearly instead of through a BVH")
    parser.add_argument("--bvh-stats", action="store_true", default=False,
                        help="Log leaf sizes and SAH cost of the built BVH")
    parser.add_argument("--shading", choices=SHADINGS, default="path",
                        help="Shading mode (default: path)")
    parser.add_argument("--tone-mapping", choices=sorted(TONE_MAPPERS), default="clamp",
                        help="Output tone mapping (default: clamp)")
    parser.add_argument("--output", default="output.png",
                        help="Output image path (default: output.png)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: INFO)")
    return parser.parse_args(argv)

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = RenderSettings.from_quality(
            args.quality,
            width=args.width,
            aspect_ratio=args.aspect_ratio,
            samples_per_pixel=args.samples,
            max_depth=args.max_depth,
            batch_rows=args.batch_rows,
            workers=args.workers,
            executor=args.executor,
            seed=args.seed,
            shading=args.shading,
        )
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    scene = SCENES[args.scene]()
    logger.info("Scene %r with %d objects", args.scene, len(scene.world))
    if args.no_bvh:
        world = scene.world
    else:
        world = scene.world.build_bvh(scene.shutter)
        logger.info("BVH: %d nodes, depth %d", world.node_count, world.depth())
        if args.bvh_stats:
            stats = bvh_stats(world)
            logger.info("BVH leaves: %d, max size %d, mean size %.2f, SAH cost %.2f",
                        stats["leaves"], stats["max_leaf_size"],
                        stats["mean_leaf_size"], stats["sah_cost"])
    camera = scene.camera(settings.aspect_ratio)

    renderer = Renderer(settings)
    with tqdm(total=renderer.height, unit="row", desc="Rendering") as bar:
        image = renderer.render(camera, world, progress=bar.update)

    save_image(image, args.output, tone_mapping=args.tone_mapping)
    return 0

if __name__ == "__main__":
    sys.exit(main())
