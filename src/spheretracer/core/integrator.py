"""Path engine: expands camera rays into weighted bounce trees.

Each pixel's primary ray becomes a tree of sub-rays. The tree is expanded
breadth-first through an explicit FIFO of Work items rather than through
recursion, so stack depth stays constant no matter how the paths branch.

Processing one Work item:

    1. Attenuation cutoff: if every channel is below min_attenuation the
       item is dropped without touching the scene.
    2. Intersection: the ray is cast against the scene; a miss drops the
       item (it escapes and contributes nothing).
    3. Shading: the hit object's texture color times the item's
       attenuation, scaled by the object's emittance, is added into the
       item's pixel. This is the only place radiance is written.
    4. Bounces: a reflected and a transmitted child are spawned, each
       perturbed by the importance sampler, offset from the hit point by
       ray_epsilon along its new direction, and weighted by the shaded
       color times reflectance or transmittance respectively.

Paths end when they fall below the cutoff, miss the scene, or reach the
configured depth cap.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretracer.core.integrator import render_scene
    >>> from src.spheretracer.scene.presets import create_default_scene
    >>> output = render_scene(create_default_scene(), 80, 60, np.random.default_rng(0))
    >>> image = output.to_image()
"""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from src.spheretracer.camera.pinhole import generate_primary_work
from src.spheretracer.core.ray import Ray, Vector, reflect
from src.spheretracer.core.sampler import perturb
from src.spheretracer.core.work import Output, Work
from src.spheretracer.scene.model import Scene

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Paths whose attenuation is below this in every channel are dropped
MIN_ATTENUATION = 0.01

# Offset of bounce origins along their direction, to avoid self-intersection
RAY_EPSILON = 0.01

# Bounces after which no further children are spawned
DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True)
class RenderSettings:
    """Tunable parameters of the path engine.

    Attributes:
        min_attenuation: Attenuation cutoff applied to every channel.
        ray_epsilon: Bounce origin offset along the new direction.
        max_depth: Items at this depth still add their emission but spawn
            no children. None disables the cap.
        glossy: If False, every material is treated as a perfect mirror /
            refractor (diffuseness 0) and the sampler draws nothing.
    """

    min_attenuation: float = MIN_ATTENUATION
    ray_epsilon: float = RAY_EPSILON
    max_depth: int | None = DEFAULT_MAX_DEPTH
    glossy: bool = True


DEFAULT_SETTINGS = RenderSettings()


def process_work(
    scene: Scene,
    work: Work,
    rng: np.random.Generator,
    add_work: Callable[[Work], None],
    output: Output,
    settings: RenderSettings = DEFAULT_SETTINGS,
) -> None:
    """Run one Work item through the path state machine.

    Args:
        scene: The scene to cast against.
        work: The item to process.
        rng: Random source for bounce sampling.
        add_work: Receives each spawned child item.
        output: Buffer the item's pixel accumulates into.
        settings: Engine parameters.
    """
    if work.attenuation.all_below(settings.min_attenuation):
        return

    collision = scene.cast(work.ray)
    if collision is None:
        return

    obj = collision.object
    color = work.attenuation * obj.texture.resolve(collision.location)

    output.add(work.pixel_x, work.pixel_y, color * obj.emittance)

    if settings.max_depth is not None and work.depth >= settings.max_depth:
        return

    diffuseness = obj.diffuseness if settings.glossy else 0.0
    location = collision.location
    normal = collision.normal
    incoming = work.ray.direction

    def spawn(direction: Vector, weight: float) -> None:
        add_work(
            Work(
                ray=Ray(origin=location + direction * settings.ray_epsilon, direction=direction),
                pixel_x=work.pixel_x,
                pixel_y=work.pixel_y,
                attenuation=color * weight,
                depth=work.depth + 1,
            )
        )

    reflected = perturb(reflect(incoming, normal), normal, diffuseness, rng)
    spawn(reflected, obj.reflectance)

    # No refraction: transmitted rays keep going straight
    transmitted = perturb(incoming, -normal, diffuseness, rng)
    spawn(transmitted, obj.transmittance)


def render_scene(
    scene: Scene,
    width: int,
    height: int,
    rng: np.random.Generator,
    settings: RenderSettings = DEFAULT_SETTINGS,
) -> Output:
    """Render one frame.

    Every pixel's primary Work item is queued before any is processed; the
    queue is then drained in FIFO order. Given the same scene, resolution,
    settings and generator state the result is bit-identical.

    Args:
        scene: The scene to render. Not modified.
        width: Image width in pixels.
        height: Image height in pixels.
        rng: Random source, consumed in a deterministic order.
        settings: Engine parameters.

    Returns:
        The finished frame as unclamped linear radiance.

    Raises:
        ValueError: If the resolution is not positive or the camera basis
            is degenerate.
    """
    start = time.perf_counter()

    output = Output(width, height)
    queue: deque[Work] = deque(generate_primary_work(scene, width, height))

    processed = 0
    while queue:
        work = queue.popleft()
        process_work(scene, work, rng, queue.append, output, settings)
        processed += 1

    logger.debug(
        "Rendered %dx%d frame: %d work items in %.1f ms",
        width,
        height,
        processed,
        (time.perf_counter() - start) * 1000.0,
    )
    return output
