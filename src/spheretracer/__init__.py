"""Monte Carlo path tracer for scenes of spheres.

For every pixel a camera ray is expanded breadth-first into a tree of
reflected and transmitted sub-rays, each weighted by the attenuation it
has accumulated, and emitted light found along the way is summed into the
pixel. Bounce directions are importance sampled around the ideal mirror or
straight-through direction according to each material's diffuseness.

Subpackages:
    core: Vector and color types, work queue items, output buffer,
        importance sampler, path engine and progressive rendering
    geometry: Ray-sphere intersection
    materials: Surface textures
    scene: Scene model, nearest-hit search and preset scenes
    camera: Primary ray generation (Taichi kernel)
    preview: Display processing, PNG export and interactive window
"""

__version__ = "0.1.0"
