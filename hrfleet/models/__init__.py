from hrfleet.models.employee import Employee, PointsAward
from hrfleet.models.vehicle import Vehicle

__all__ = ["Employee", "PointsAward", "Vehicle"]
