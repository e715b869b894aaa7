from .vector2 import (
    Vector2,
    length,
    distance,
    distance_squared,
)
