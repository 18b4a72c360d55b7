"""Create translation unit, translation and file tables

Revision ID: create_translation_tables
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_translation_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'files',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('domain', sa.String(255), nullable=False),
        sa.Column('locale', sa.String(10), nullable=False),
        sa.Column('extension', sa.String(10), nullable=False),
        sa.Column('path', sa.String(255), nullable=False),
        sa.Column('hash', sa.String(64), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hash')
    )
    op.create_index('ix_files_domain', 'files', ['domain'])

    op.create_table(
        'trans_units',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(255), nullable=False),
        sa.Column('domain', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key', 'domain', name='key_domain_idx')
    )
    op.create_index('ix_trans_units_domain', 'trans_units', ['domain'])

    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('trans_unit_id', sa.Integer(), nullable=False),
        sa.Column('locale', sa.String(10), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('file_id', sa.Integer(), nullable=True),
        sa.Column('modified_manually', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['trans_unit_id'], ['trans_units.id'], ),
        sa.ForeignKeyConstraint(['file_id'], ['files.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('trans_unit_id', 'locale', name='trans_unit_locale_idx')
    )
    op.create_index('ix_translations_trans_unit_id', 'translations', ['trans_unit_id'])
    op.create_index('ix_translations_locale', 'translations', ['locale'])
    op.create_index('ix_translations_file_id', 'translations', ['file_id'])


def downgrade():
    op.drop_index('ix_translations_file_id', table_name='translations')
    op.drop_index('ix_translations_locale', table_name='translations')
    op.drop_index('ix_translations_trans_unit_id', table_name='translations')
    op.drop_table('translations')
    op.drop_index('ix_trans_units_domain', table_name='trans_units')
    op.drop_table('trans_units')
    op.drop_index('ix_files_domain', table_name='files')
    op.drop_table('files')
