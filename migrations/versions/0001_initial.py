"""initial schema: contas, perfis, associações e catadores

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

BigIntegerPK = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "roles",
        sa.Column("id", BigIntegerPK, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_roles_name", "roles", ["name"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("role_id", BigIntegerPK, sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "etnias",
        sa.Column("id", BigIntegerPK, primary_key=True, autoincrement=True),
        sa.Column("nomenclatura", sa.String(100), nullable=False),
    )
    op.create_table(
        "generos",
        sa.Column("id", BigIntegerPK, primary_key=True, autoincrement=True),
        sa.Column("nomenclatura", sa.String(100), nullable=False),
    )

    op.create_table(
        "associacoes",
        sa.Column("id", BigIntegerPK, primary_key=True, autoincrement=True),
        sa.Column("cnpj", sa.String(18), nullable=False),
        sa.Column("endereco", sa.String(255), nullable=True),
        sa.Column("bairro", sa.String(255), nullable=True),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, unique=True),
    )
    op.create_index("ix_associacoes_cnpj", "associacoes", ["cnpj"], unique=True)

    op.create_table(
        "catadores",
        sa.Column("id", BigIntegerPK, primary_key=True, autoincrement=True),
        sa.Column("cpf", sa.String(14), nullable=False),
        sa.Column("endereco", sa.String(255), nullable=True),
        sa.Column("bairro", sa.String(255), nullable=True),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, unique=True),
        sa.Column("associacao_id", BigIntegerPK, sa.ForeignKey("associacoes.id"), nullable=False),
        sa.Column("etnia_id", BigIntegerPK, sa.ForeignKey("etnias.id"), nullable=True),
        sa.Column("genero_id", BigIntegerPK, sa.ForeignKey("generos.id"), nullable=True),
    )
    op.create_index("ix_catadores_cpf", "catadores", ["cpf"], unique=True)
    op.create_index("ix_catadores_associacao_id", "catadores", ["associacao_id"])


def downgrade() -> None:
    op.drop_index("ix_catadores_associacao_id", table_name="catadores")
    op.drop_index("ix_catadores_cpf", table_name="catadores")
    op.drop_table("catadores")
    op.drop_index("ix_associacoes_cnpj", table_name="associacoes")
    op.drop_table("associacoes")
    op.drop_table("generos")
    op.drop_table("etnias")
    op.drop_table("user_roles")
    op.drop_index("ix_roles_name", table_name="roles")
    op.drop_table("roles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
