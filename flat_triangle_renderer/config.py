#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/config.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import os
from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigurationError
from .shading import ShadingModel

NEAR_PLANE_POLICIES = ('clip', 'reject', 'clamp')

_TRUTHY = ('1', 'true', 'yes', 'on')


@dataclass
class RenderConfig:
    """Configuration for the rasterization pipeline."""
    backface_culling: bool = True
    # clip: split triangles at the near plane; reject: drop them;
    # clamp: keep the clamped projection (distorts, legacy output)
    near_plane_policy: str = 'clip'
    min_light: float = 0.3
    perspective_correct_depth: bool = False
    workers: int = 1
    tile_size: int = 64

    # Instance of the ShadingModel computed from these settings
    shading: Optional[ShadingModel] = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self):
        self.validate()
        self.init_shading()

    def validate(self):
        if self.near_plane_policy not in NEAR_PLANE_POLICIES:
            raise ConfigurationError(
                f"near_plane_policy must be one of {NEAR_PLANE_POLICIES}, "
                f"got {self.near_plane_policy!r}")
        if not 0.0 <= self.min_light <= 1.0:
            raise ConfigurationError(f"min_light must be within [0, 1], got {self.min_light}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        if self.tile_size < 1:
            raise ConfigurationError(f"tile_size must be >= 1, got {self.tile_size}")

    def init_shading(self):
        """Update the internal shading model based on current settings."""
        self.shading = ShadingModel(min_light=self.min_light)

    @classmethod
    def from_environ(cls, environ=None) -> 'RenderConfig':
        """
        Build a config from FLATRENDER_* environment variables.
        Unset variables keep the dataclass defaults.
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        try:
            if 'FLATRENDER_WORKERS' in env:
                kwargs['workers'] = int(env['FLATRENDER_WORKERS'])
            if 'FLATRENDER_TILE_SIZE' in env:
                kwargs['tile_size'] = int(env['FLATRENDER_TILE_SIZE'])
            if 'FLATRENDER_MIN_LIGHT' in env:
                kwargs['min_light'] = float(env['FLATRENDER_MIN_LIGHT'])
        except ValueError as e:
            raise ConfigurationError(f"invalid FLATRENDER_* value: {e}") from e
        if 'FLATRENDER_NEAR_POLICY' in env:
            kwargs['near_plane_policy'] = env['FLATRENDER_NEAR_POLICY'].strip().lower()
        if env.get('FLATRENDER_NO_CULL', '').strip().lower() in _TRUTHY:
            kwargs['backface_culling'] = False
        return cls(**kwargs)
