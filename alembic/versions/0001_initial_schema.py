"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-12-27 10:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    # ---- Ana veri ----
    op.create_table(
        "Department",
        sa.Column("DepartmentID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("Name", sa.String(200), nullable=False),
        sa.Column("Description", sa.String(1000)),
    )
    op.create_table(
        "Category",
        sa.Column("CategoryID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("Name", sa.String(200), nullable=False),
        sa.Column("Description", sa.String(1000)),
    )

    # ---- Kullanıcı / oturum ----
    op.create_table(
        "AppUser",
        sa.Column("UserID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("Username", sa.String(50), nullable=False, unique=True),
        sa.Column("FullName", sa.String(100), nullable=False),
        sa.Column("Email", sa.String(200), nullable=False, unique=True),
        sa.Column("HashedPassword", sa.String(255), nullable=False),
        sa.Column("Role", sa.String(20), nullable=False, server_default=sa.text("'employee'")),
        sa.Column("IsActive", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("DepartmentID", sa.Integer(), sa.ForeignKey("Department.DepartmentID")),
        sa.Column("CreatedAt", sa.DateTime(), nullable=False),
        sa.Column("ResetToken", sa.String(128)),
        sa.Column("ResetTokenExpiry", sa.DateTime()),
        sa.CheckConstraint("Role in ('admin','technician','employee')", name="CK_AppUser_Role"),
    )
    op.create_table(
        "UserSession",
        sa.Column("SessionID", sa.String(64), primary_key=True),
        sa.Column("UserID", sa.Integer(), sa.ForeignKey("AppUser.UserID"), nullable=False),
        sa.Column("CreatedAt", sa.DateTime(), nullable=False),
        sa.Column("ExpiresAt", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_UserSession_UserID", "UserSession", ["UserID"], unique=False)

    # ---- Ekipler ----
    op.create_table(
        "Team",
        sa.Column("TeamID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("Name", sa.String(200), nullable=False),
        sa.Column("Specialization", sa.String(100)),
        sa.Column("Description", sa.String(1000)),
    )
    op.create_table(
        "TeamMember",
        sa.Column("ID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("TeamID", sa.Integer(), sa.ForeignKey("Team.TeamID"), nullable=False),
        sa.Column("UserID", sa.Integer(), sa.ForeignKey("AppUser.UserID"), nullable=False),
        sa.UniqueConstraint("TeamID", "UserID", name="UQ_TeamMember_Team_User"),
    )
    op.create_index("ix_TeamMember_TeamID", "TeamMember", ["TeamID"], unique=False)
    op.create_index("ix_TeamMember_UserID", "TeamMember", ["UserID"], unique=False)

    # ---- Varlıklar ----
    op.create_table(
        "WorkCenter",
        sa.Column("WorkCenterID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("Name", sa.String(200), nullable=False),
        sa.Column("Code", sa.String(50), nullable=False, unique=True),
        sa.Column("Tag", sa.String(100)),
        sa.Column("AlternativeWorkCenters", sa.JSON(), nullable=False),
        sa.Column("CostPerHour", sa.DECIMAL(10, 2), nullable=False),
        sa.Column("Capacity", sa.Float(), nullable=False),
        sa.Column("TimeEfficiency", sa.Float(), nullable=False),
        sa.Column("OEETarget", sa.Float(), nullable=False),
        sa.Column("Status_s", sa.String(20), nullable=False, server_default=sa.text("'active'")),
        sa.CheckConstraint("Status_s in ('active','scrapped')", name="CK_WorkCenter_Status"),
        sa.CheckConstraint("CostPerHour >= 0", name="CK_WorkCenter_Cost_NonNegative"),
    )
    op.create_table(
        "Equipment",
        sa.Column("EquipmentID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("Name", sa.String(200), nullable=False),
        sa.Column("SerialNumber", sa.String(100), nullable=False, unique=True),
        sa.Column("CategoryID", sa.Integer(), sa.ForeignKey("Category.CategoryID"), nullable=False),
        sa.Column("DepartmentID", sa.Integer(), sa.ForeignKey("Department.DepartmentID")),
        sa.Column("AssignedEmployeeID", sa.Integer(), sa.ForeignKey("AppUser.UserID")),
        sa.Column("Location", sa.String(200)),
        sa.Column("PurchaseDate", sa.Date()),
        sa.Column("WarrantyExpiryDate", sa.Date()),
        sa.Column("MaintenanceTeamID", sa.Integer(), sa.ForeignKey("Team.TeamID")),
        sa.Column("DefaultTechnicianID", sa.Integer(), sa.ForeignKey("AppUser.UserID")),
        sa.Column("Status_s", sa.String(20), nullable=False, server_default=sa.text("'active'")),
        sa.Column("AssignedDate", sa.DateTime()),
        sa.Column("ScrapDate", sa.DateTime()),
        sa.Column("Notes", sa.String(2000)),
        sa.CheckConstraint("Status_s in ('active','scrapped')", name="CK_Equipment_Status"),
    )

    # ---- Bakım talepleri ----
    op.create_table(
        "MaintenanceRequest",
        sa.Column("RequestID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("Subject", sa.String(200), nullable=False),
        sa.Column("Description_s", sa.String(2000), nullable=False),
        sa.Column("Instructions", sa.String(2000)),
        sa.Column("RequestType", sa.String(20), nullable=False),
        sa.Column("MaintenanceFor", sa.String(20), nullable=False, server_default=sa.text("'equipment'")),
        sa.Column("EquipmentID", sa.Integer(), sa.ForeignKey("Equipment.EquipmentID")),
        sa.Column("WorkCenterID", sa.Integer(), sa.ForeignKey("WorkCenter.WorkCenterID")),
        sa.Column("MaintenanceTeamID", sa.Integer(), sa.ForeignKey("Team.TeamID")),
        sa.Column("AssignedTechnicianID", sa.Integer(), sa.ForeignKey("AppUser.UserID")),
        sa.Column("ScheduledDate", sa.DateTime()),
        sa.Column("ActualStartDate", sa.DateTime()),
        sa.Column("CompletedDate", sa.DateTime()),
        sa.Column("DurationHours", sa.Integer()),
        sa.Column("Priority_s", sa.String(10), nullable=False, server_default=sa.text("'medium'")),
        sa.Column("Status_s", sa.String(20), nullable=False, server_default=sa.text("'new'")),
        sa.Column("CreatedBy", sa.Integer(), sa.ForeignKey("AppUser.UserID"), nullable=False),
        sa.Column("CreatedAt", sa.DateTime(), nullable=False),
        sa.CheckConstraint("Status_s in ('new','in_progress','repaired','scrap')", name="CK_Request_Status"),
        sa.CheckConstraint("Priority_s in ('low','medium','high')", name="CK_Request_Priority"),
        sa.CheckConstraint("RequestType in ('corrective','preventive')", name="CK_Request_Type"),
        sa.CheckConstraint("MaintenanceFor in ('equipment','work_center')", name="CK_Request_Target"),
    )
    op.create_table(
        "RequestTechnician",
        sa.Column("ID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("RequestID", sa.Integer(), sa.ForeignKey("MaintenanceRequest.RequestID"), nullable=False),
        sa.Column("TechnicianID", sa.Integer(), sa.ForeignKey("AppUser.UserID"), nullable=False),
        sa.UniqueConstraint("RequestID", "TechnicianID", name="UQ_RequestTechnician_Request_Tech"),
    )
    op.create_index("ix_RequestTechnician_RequestID", "RequestTechnician", ["RequestID"], unique=False)
    op.create_index("ix_RequestTechnician_TechnicianID", "RequestTechnician", ["TechnicianID"], unique=False)

    op.create_table(
        "Worksheet",
        sa.Column("WorksheetID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("RequestID", sa.Integer(), sa.ForeignKey("MaintenanceRequest.RequestID"), nullable=False),
        sa.Column("UserID", sa.Integer(), sa.ForeignKey("AppUser.UserID"), nullable=False),
        sa.Column("StartTime", sa.DateTime(), nullable=False),
        sa.Column("EndTime", sa.DateTime(), nullable=False),
        sa.Column("Description", sa.String(1000)),
        sa.Column("CreatedAt", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_Worksheet_RequestID", "Worksheet", ["RequestID"], unique=False)

    # ---- Denetim kaydı ----
    op.create_table(
        "ActivityLog",
        sa.Column("LogID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("ReferenceType", sa.String(30), nullable=False),
        sa.Column("ReferenceID", sa.Integer(), nullable=False),
        sa.Column("Action", sa.String(200), nullable=False),
        sa.Column("PerformedBy", sa.Integer(), sa.ForeignKey("AppUser.UserID"), nullable=False),
        sa.Column("Timestamp", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_ActivityLog_ReferenceType", "ActivityLog", ["ReferenceType"], unique=False)
    op.create_index("ix_ActivityLog_ReferenceID", "ActivityLog", ["ReferenceID"], unique=False)


def downgrade():
    op.drop_index("ix_ActivityLog_ReferenceID", table_name="ActivityLog")
    op.drop_index("ix_ActivityLog_ReferenceType", table_name="ActivityLog")
    op.drop_table("ActivityLog")
    op.drop_index("ix_Worksheet_RequestID", table_name="Worksheet")
    op.drop_table("Worksheet")
    op.drop_index("ix_RequestTechnician_TechnicianID", table_name="RequestTechnician")
    op.drop_index("ix_RequestTechnician_RequestID", table_name="RequestTechnician")
    op.drop_table("RequestTechnician")
    op.drop_table("MaintenanceRequest")
    op.drop_table("Equipment")
    op.drop_table("WorkCenter")
    op.drop_index("ix_TeamMember_UserID", table_name="TeamMember")
    op.drop_index("ix_TeamMember_TeamID", table_name="TeamMember")
    op.drop_table("TeamMember")
    op.drop_table("Team")
    op.drop_index("ix_UserSession_UserID", table_name="UserSession")
    op.drop_table("UserSession")
    op.drop_table("AppUser")
    op.drop_table("Category")
    op.drop_table("Department")
