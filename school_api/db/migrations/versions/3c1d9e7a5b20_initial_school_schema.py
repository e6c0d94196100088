"""Initial school schema.

- schools
- students, student_performances, attendance
- employees (school_id nullable for legacy rows)
- fee_collections
- buses, bus_routes
- maintenance_items, maintenance_logs

Every table except schools and employees carries a NOT NULL school_id.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1d9e7a5b20"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _school_fk(table: str, nullable: bool = False, ondelete: str = "CASCADE") -> list:
    return [
        sa.Column("school_id", sa.Uuid(), nullable=nullable),
        sa.ForeignKeyConstraint(
            ["school_id"], ["schools.id"], name=f"fk_{table}_school_id_schools", ondelete=ondelete
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "schools",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("registration_number", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_schools"),
        sa.UniqueConstraint("registration_number", name="uq_schools_registration_number"),
    )

    # Academic
    op.create_table(
        "students",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_school_fk("students"),
        sa.Column("student_id", sa.Text(), nullable=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("grade", sa.Text(), nullable=True),
        sa.Column("roll_number", sa.Text(), nullable=True),
        sa.Column("admission_number", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("transport_required", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_students"),
    )
    op.create_index("ix_students_school_id", "students", ["school_id"])
    op.create_index("ix_students_grade", "students", ["grade"])

    op.create_table(
        "student_performances",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_school_fk("student_performances"),
        sa.Column("student_id", sa.Uuid(), nullable=False),
        sa.Column("grade", sa.Text(), nullable=False),
        sa.Column("subject", sa.Text(), nullable=True),
        sa.Column("score", sa.Numeric(5, 2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_student_performances"),
        sa.ForeignKeyConstraint(
            ["student_id"], ["students.id"], name="fk_student_performances_student_id_students", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_student_performances_school_id", "student_performances", ["school_id"])

    op.create_table(
        "attendance",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_school_fk("attendance"),
        sa.Column("student_id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("is_present", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_attendance"),
        sa.ForeignKeyConstraint(
            ["student_id"], ["students.id"], name="fk_attendance_student_id_students", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_attendance_school_id", "attendance", ["school_id"])

    # Staff
    op.create_table(
        "employees",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_school_fk("employees", nullable=True, ondelete="SET NULL"),
        sa.Column("employee_id", sa.Text(), nullable=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("department", sa.Text(), nullable=True),
        sa.Column("position", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("salary", sa.Numeric(12, 2), nullable=True),
        sa.Column("date_of_joining", sa.Date(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_employees"),
    )
    op.create_index("ix_employees_school_id", "employees", ["school_id"])

    # Finance
    op.create_table(
        "fee_collections",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_school_fk("fee_collections"),
        sa.Column("student_id", sa.Uuid(), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("payment_mode", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_fee_collections"),
        sa.ForeignKeyConstraint(
            ["student_id"], ["students.id"], name="fk_fee_collections_student_id_students", ondelete="SET NULL"
        ),
    )
    op.create_index("ix_fee_collections_school_id", "fee_collections", ["school_id"])

    # Transport
    op.create_table(
        "buses",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_school_fk("buses"),
        sa.Column("bus_number", sa.Text(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_buses"),
    )
    op.create_index("ix_buses_school_id", "buses", ["school_id"])

    op.create_table(
        "bus_routes",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_school_fk("bus_routes"),
        sa.Column("route_name", sa.Text(), nullable=False),
        sa.Column("bus_number", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("delay_reason", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_bus_routes"),
    )
    op.create_index("ix_bus_routes_school_id", "bus_routes", ["school_id"])

    # Maintenance
    op.create_table(
        "maintenance_items",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_school_fk("maintenance_items"),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("last_checked", sa.Date(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_maintenance_items"),
    )
    op.create_index("ix_maintenance_items_school_id", "maintenance_items", ["school_id"])

    op.create_table(
        "maintenance_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_school_fk("maintenance_logs"),
        sa.Column("facility", sa.Text(), nullable=False),
        sa.Column("issue", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_maintenance_logs"),
    )
    op.create_index("ix_maintenance_logs_school_id", "maintenance_logs", ["school_id"])


def downgrade() -> None:
    for tbl in [
        "maintenance_logs",
        "maintenance_items",
        "bus_routes",
        "buses",
        "fee_collections",
        "employees",
        "attendance",
        "student_performances",
        "students",
    ]:
        op.drop_index(f"ix_{tbl}_school_id", table_name=tbl)
        if tbl == "students":
            op.drop_index("ix_students_grade", table_name=tbl)
        op.drop_table(tbl)
    op.drop_table("schools")
