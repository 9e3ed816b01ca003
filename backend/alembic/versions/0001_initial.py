from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "player",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("ranking", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "tournament",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("is_group_based", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "tournament_group",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("tournament_id", sa.String(), sa.ForeignKey("tournament.id"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("player_ids", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "match",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("tournament_id", sa.String(), sa.ForeignKey("tournament.id"), nullable=False),
        sa.Column("group_id", sa.String(), sa.ForeignKey("tournament_group.id"), nullable=True),
        sa.Column("player1_id", sa.String(), nullable=False),
        sa.Column("player2_id", sa.String(), nullable=False),
        sa.Column("score1", sa.Integer(), nullable=False),
        sa.Column("score2", sa.Integer(), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("played_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(
        "ix_match_tournament_group", "match", ["tournament_id", "group_id"]
    )

def downgrade():
    op.drop_index("ix_match_tournament_group", table_name="match")
    for t in ["match", "tournament_group", "tournament", "player"]:
        op.drop_table(t)
