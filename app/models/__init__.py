# Access control: database models
# Import all models here for SQLAlchemy discovery

from app.models.user import User                            # noqa
from app.models.vehicle_entry import VehicleEntry           # noqa
from app.models.external_visitor import ExternalVisitor     # noqa
from app.models.employee_departure import EmployeeDeparture  # noqa
from app.models.turnstile_record import TurnstileRecord     # noqa
