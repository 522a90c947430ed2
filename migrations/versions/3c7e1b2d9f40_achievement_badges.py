from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7e1b2d9f40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'children',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('date_created', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('available_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('badges_earned', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('current_balance', sa.Numeric(12, 2), nullable=True),
        sa.Column('savings_balance', sa.Numeric(12, 2), nullable=True),
        sa.Column('total_saved', sa.Numeric(12, 2), nullable=True),
        sa.Column('transaction_count', sa.Integer(), nullable=True),
        sa.Column('task_count', sa.Integer(), nullable=True),
        sa.Column('approved_task_streak', sa.Integer(), nullable=True),
        sa.Column('saving_streak', sa.Integer(), nullable=True),
        sa.Column('budget_streak', sa.Integer(), nullable=True),
        sa.Column('monthly_savings_rate', sa.Numeric(5, 2), nullable=True),
        sa.Column('goals_completed', sa.Integer(), nullable=True),
        sa.Column('last_allowance_date', sa.Date(), nullable=True),
    )

    op.create_table(
        'badges',
        sa.Column('code', sa.String(length=50), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('icon_url', sa.String(length=255), nullable=True),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('rarity', sa.Integer(), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('criteria_type', sa.String(length=30), nullable=False),
        sa.Column('criteria_config', sa.JSON(), nullable=False),
        sa.Column('triggers', sa.JSON(), nullable=False),
        sa.Column('is_secret', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'child_badge_progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id'), nullable=False),
        sa.Column('badge_code', sa.String(length=50), sa.ForeignKey('badges.code'), nullable=False),
        sa.Column('current_progress', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('target_progress', sa.Numeric(12, 2), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('child_id', 'badge_code', name='unique_child_badge_progress'),
    )

    op.create_table(
        'child_badges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id'), nullable=False),
        sa.Column('badge_code', sa.String(length=50), sa.ForeignKey('badges.code'), nullable=False),
        sa.Column('earned_at', sa.DateTime(), nullable=False),
        sa.Column('earned_context', sa.String(length=255), nullable=True),
        sa.Column('is_new', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_displayed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('child_id', 'badge_code', name='unique_child_badge'),
    )

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )


def downgrade():
    op.drop_table('notifications')
    op.drop_table('child_badges')
    op.drop_table('child_badge_progress')
    op.drop_table('badges')
    op.drop_table('children')
