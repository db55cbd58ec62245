from .base import HitSource
from .dummy import DummyHitSource
