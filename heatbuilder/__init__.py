from heatbuilder.models import Entrant, Heat, LaneAssignment, Swimmer
from heatbuilder.seeding import MIN_SWIMMERS_PER_HEAT, generate_heats, lane_order

__all__ = [
    "Entrant",
    "Heat",
    "LaneAssignment",
    "MIN_SWIMMERS_PER_HEAT",
    "Swimmer",
    "generate_heats",
    "lane_order",
]
