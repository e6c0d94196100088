"""
ORM models for schools and their academic, staff, finance, transport and
maintenance records.

Importing this package ensures model classes are registered with the Base
metadata for Alembic and runtime usage.
"""

from .school import School  # noqa: F401
from .academic import (  # noqa: F401
    AdmissionStatus,
    Attendance,
    Student,
    StudentPerformance,
)
from .staff import (  # noqa: F401
    Employee,
    EmployeeStatus,
)
from .finance import (  # noqa: F401
    FeeCollection,
    FeeStatus,
)
from .transport import (  # noqa: F401
    Bus,
    BusRoute,
    BusStatus,
    RouteStatus,
)
from .maintenance import (  # noqa: F401
    MaintenanceItem,
    MaintenanceLog,
    MaintenanceStatus,
)
