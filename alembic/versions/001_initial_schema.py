"""Initial schema — work orders, worker directories, rules and distribution ledger.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Technicians
    op.create_table(
        "technicians",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(100), nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(200), nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    # Report elaborators
    op.create_table(
        "report_elaborators",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(100), unique=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("specialization", sa.String(100), nullable=True),
        sa.Column("max_concurrent_reports", sa.Integer, nullable=False, server_default="10"),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
    )

    # Contract managers
    op.create_table(
        "contract_managers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("contract_id", sa.Integer, nullable=False),
        sa.Column("user_id", sa.String(100), nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
    )
    op.create_index("idx_contract_managers_contract", "contract_managers", ["contract_id"])

    # Work orders
    op.create_table(
        "work_orders",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("os_number", sa.String(50), unique=True, nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("contract_id", sa.Integer, nullable=True),
        sa.Column(
            "technician_id", sa.Integer, sa.ForeignKey("technicians.id"), nullable=True
        ),
        sa.Column("report_elaborator_id", sa.String(100), nullable=True),
        sa.Column("supervisor_id", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("priority", sa.String(20), nullable=False, server_default="NORMAL"),
        sa.Column("estimated_hours", sa.Float, nullable=True),
        sa.Column("actual_hours", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "idx_work_orders_status_technician", "work_orders", ["status", "technician_id"]
    )
    op.create_index(
        "idx_work_orders_status_elaborator", "work_orders", ["status", "report_elaborator_id"]
    )

    # Assignment rules
    op.create_table(
        "assignment_rules",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("contract_id", sa.Integer, nullable=True),
        sa.Column("rule_type", sa.String(30), nullable=False),
        sa.Column("priority", sa.Integer, nullable=False, server_default="0"),
        sa.Column("configuration", sa.JSON, nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
    )
    op.create_index("idx_assignment_rules_contract", "assignment_rules", ["contract_id"])

    # Distribution ledger
    op.create_table(
        "work_distribution",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("contract_id", sa.Integer, nullable=False),
        sa.Column(
            "technician_id", sa.Integer, sa.ForeignKey("technicians.id"), nullable=False
        ),
        sa.Column("report_elaborator_id", sa.String(100), nullable=False),
        sa.Column("supervisor_id", sa.String(100), nullable=True),
        sa.Column("assigned_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("completed_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("avg_completion_time", sa.Float, nullable=True),
        sa.Column("last_assignment", sa.DateTime, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "contract_id", "technician_id", "report_elaborator_id",
            name="uq_work_distribution_key",
        ),
    )


def downgrade() -> None:
    op.drop_table("work_distribution")
    op.drop_table("assignment_rules")
    op.drop_index("idx_work_orders_status_elaborator", table_name="work_orders")
    op.drop_index("idx_work_orders_status_technician", table_name="work_orders")
    op.drop_table("work_orders")
    op.drop_index("idx_contract_managers_contract", table_name="contract_managers")
    op.drop_table("contract_managers")
    op.drop_table("report_elaborators")
    op.drop_table("technicians")
