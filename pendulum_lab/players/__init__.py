"""
Consumers of evolved controllers.

LiveController pulls the newest published agent once per frame and
uses it to drive a live pendulum.
"""
from .live import MAX_FRAME_DURATION, LiveController

__all__ = [
    'LiveController',
    'MAX_FRAME_DURATION',
]
