"""Create explorer tables

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

Tables populated by the chain indexer and read by the explorer API:
blocks, extrinsics, events, tokens, evm_transactions, evm_transaction_events.
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def upgrade() -> None:
    op.create_table(
        'blocks',
        sa.Column('number', sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column('hash', sa.String(66), nullable=False, unique=True),
        sa.Column('parent_hash', sa.String(66), nullable=True),
        sa.Column('timestamp', sa.BigInteger(), nullable=False, comment='Seconds since epoch'),
        sa.Column('extrinsics_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('events_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('spec_version', sa.Integer(), nullable=True),
    )
    op.create_index('ix_blocks_timestamp', 'blocks', ['timestamp'])

    op.create_table(
        'extrinsics',
        sa.Column('extrinsic_id', sa.String(64), primary_key=True),
        sa.Column('retro_extrinsic_id', sa.String(64), nullable=True, unique=True),
        sa.Column('block', sa.BigInteger(), nullable=False),
        sa.Column('timestamp', sa.BigInteger(), nullable=False),
        sa.Column('section', sa.String(64), nullable=False),
        sa.Column('method', sa.String(64), nullable=False),
        sa.Column('signer', sa.String(42), nullable=True),
        sa.Column('is_signed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('success', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('args', JSON_TYPE, nullable=False),
    )
    op.create_index('ix_extrinsics_retro_extrinsic_id', 'extrinsics', ['retro_extrinsic_id'])
    op.create_index('ix_extrinsics_block', 'extrinsics', ['block'])
    op.create_index('ix_extrinsics_signer', 'extrinsics', ['signer'])

    op.create_table(
        'events',
        sa.Column('event_id', sa.String(64), primary_key=True),
        sa.Column('extrinsic_id', sa.String(64), nullable=True),
        sa.Column('block_number', sa.BigInteger(), nullable=False),
        sa.Column('timestamp', sa.BigInteger(), nullable=False, comment='Seconds since epoch'),
        sa.Column('section', sa.String(64), nullable=False),
        sa.Column('method', sa.String(64), nullable=False),
        sa.Column('args', JSON_TYPE, nullable=False),
    )
    op.create_index('ix_events_extrinsic_id', 'events', ['extrinsic_id'])
    op.create_index('ix_events_block_number', 'events', ['block_number'])
    op.create_index('ix_events_section_method_timestamp', 'events', ['section', 'method', 'timestamp'])

    op.create_table(
        'tokens',
        sa.Column('contract_address', sa.String(42), primary_key=True),
        sa.Column('asset_id', sa.BigInteger(), nullable=True),
        sa.Column('collection_id', sa.BigInteger(), nullable=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('symbol', sa.String(50), nullable=True),
        sa.Column('decimals', sa.Integer(), nullable=True),
        sa.Column('type', sa.String(16), nullable=False),
        sa.Column('total_supply', sa.Numeric(), nullable=True),
    )
    op.create_index('ix_tokens_asset_id', 'tokens', ['asset_id'])
    op.create_index('ix_tokens_collection_id', 'tokens', ['collection_id'])
    op.create_index('ix_tokens_type', 'tokens', ['type'])

    op.create_table(
        'evm_transactions',
        sa.Column('hash', sa.String(66), primary_key=True),
        sa.Column('block_number', sa.BigInteger(), nullable=False),
        sa.Column('timestamp', sa.BigInteger(), nullable=False, comment='Milliseconds since epoch'),
        sa.Column('from_address', sa.String(42), nullable=False),
        sa.Column('to_address', sa.String(42), nullable=True),
        sa.Column('value', sa.String(80), nullable=False, server_default='0'),
        sa.Column('status', sa.String(16), nullable=False, server_default='success'),
    )
    op.create_index('ix_evm_transactions_block_number', 'evm_transactions', ['block_number'])
    op.create_index('ix_evm_transactions_timestamp', 'evm_transactions', ['timestamp'])
    op.create_index('ix_evm_transactions_from_address', 'evm_transactions', ['from_address'])
    op.create_index('ix_evm_transactions_to_address', 'evm_transactions', ['to_address'])

    op.create_table(
        'evm_transaction_events',
        sa.Column(
            'transaction_hash',
            sa.String(66),
            sa.ForeignKey('evm_transactions.hash', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column('log_index', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('event_name', sa.String(64), nullable=False),
        sa.Column('from_address', sa.String(42), nullable=True),
        sa.Column('to_address', sa.String(42), nullable=True),
        sa.Column('contract_address', sa.String(42), nullable=True),
        sa.Column('token_type', sa.String(16), nullable=True),
        sa.Column('name', sa.String(200), nullable=True),
        sa.Column('symbol', sa.String(50), nullable=True),
        sa.Column('amount', sa.String(80), nullable=True),
        sa.Column('formatted_amount', sa.String(100), nullable=True),
        sa.Column('token_id', sa.String(80), nullable=True),
    )
    op.create_index('ix_evm_transaction_events_event_name', 'evm_transaction_events', ['event_name'])
    op.create_index('ix_evm_transaction_events_from_address', 'evm_transaction_events', ['from_address'])
    op.create_index('ix_evm_transaction_events_to_address', 'evm_transaction_events', ['to_address'])


def downgrade() -> None:
    op.drop_table('evm_transaction_events')
    op.drop_table('evm_transactions')
    op.drop_table('tokens')
    op.drop_table('events')
    op.drop_table('extrinsics')
    op.drop_table('blocks')
