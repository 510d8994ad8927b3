from .entities import Entity


def check_collision(a: Entity, b: Entity) -> bool:
    """Axis-aligned box overlap; boxes that only touch along an edge do not collide."""
    return (
        a.pos.x < b.pos.x + b.size
        and a.pos.x + a.size > b.pos.x
        and a.pos.y < b.pos.y + b.size
        and a.pos.y + a.size > b.pos.y
    )
