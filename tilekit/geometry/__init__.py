from .polygon import (
    polygon_area,
    ensure_ccw,
    polygon_bounds,
    is_convex,
)
from .shapes import (
    Circle,
    Rectangle,
    Polygon,
    Polygons,
    AnchoredPolygon,
    AnchoredPolygons,
    CenteredPolygon,
    CenteredPolygons,
    CollisionShape,
    bounding_radius,
    normalized_point_sets,
)
from .collision import (
    CollisionTransform,
    CollisionPolygon,
    apply_transform,
    convex_polygons,
    decompose_polygon,
    polygons_intersect,
    shapes_intersect,
    world_polygons,
    outline_point_sets,
)
