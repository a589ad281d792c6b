"""Baseline migration - full FreelanceHub schema

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates users, clients, projects, time entries, invoices, quotes,
documents, payment keys, A/B tests, activity logs and document counters.
"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    op.execute('CREATE EXTENSION IF NOT EXISTS pgcrypto')  # For gen_random_uuid()

    # ==========================================================================
    # Users
    # ==========================================================================
    op.execute('''
        CREATE TABLE users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            auth_subject VARCHAR(255) UNIQUE NOT NULL,
            email VARCHAR(255) UNIQUE,
            first_name VARCHAR(255),
            last_name VARCHAR(255),
            profile_image_url VARCHAR(1000),
            role VARCHAR(20) NOT NULL DEFAULT 'freelancer',
            hourly_rate NUMERIC(10, 2),
            is_active BOOLEAN NOT NULL DEFAULT true,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_users_created ON users(created_at)')

    # ==========================================================================
    # Clients & Projects
    # ==========================================================================
    op.execute('''
        CREATE TABLE clients (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name VARCHAR(255) NOT NULL,
            email VARCHAR(255),
            phone VARCHAR(50),
            company VARCHAR(255),
            address TEXT,
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_clients_user_created ON clients(user_id, created_at)')

    op.execute('''
        CREATE TABLE projects (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            client_id UUID REFERENCES clients(id) ON DELETE SET NULL,
            name VARCHAR(255) NOT NULL,
            description TEXT,
            hourly_rate NUMERIC(10, 2),
            status VARCHAR(20) NOT NULL DEFAULT 'active',
            deadline TIMESTAMPTZ,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_projects_user_created ON projects(user_id, created_at)')
    op.execute('CREATE INDEX idx_projects_user_status ON projects(user_id, status)')

    # ==========================================================================
    # Time entries (one running entry per user)
    # ==========================================================================
    op.execute('''
        CREATE TABLE time_entries (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            project_id UUID NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            description TEXT,
            start_time TIMESTAMPTZ NOT NULL,
            end_time TIMESTAMPTZ,
            duration INTEGER,
            is_running BOOLEAN NOT NULL DEFAULT false,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_time_entries_user_created ON time_entries(user_id, created_at)')
    op.execute('CREATE INDEX idx_time_entries_project ON time_entries(project_id)')
    op.execute('''
        CREATE UNIQUE INDEX uq_time_entries_one_running_per_user
        ON time_entries(user_id) WHERE is_running
    ''')

    # ==========================================================================
    # Invoices & Quotes
    # ==========================================================================
    op.execute('''
        CREATE TABLE invoices (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            client_id UUID NOT NULL REFERENCES clients(id) ON DELETE RESTRICT,
            project_id UUID REFERENCES projects(id) ON DELETE SET NULL,
            invoice_number VARCHAR(50) UNIQUE NOT NULL,
            amount NUMERIC(10, 2) NOT NULL,
            tax_amount NUMERIC(10, 2) NOT NULL DEFAULT 0,
            total_amount NUMERIC(10, 2) NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'draft',
            issue_date TIMESTAMPTZ DEFAULT now(),
            due_date TIMESTAMPTZ,
            paid_date TIMESTAMPTZ,
            notes TEXT,
            template_variant VARCHAR(1) NOT NULL DEFAULT 'A',
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_invoices_user_created ON invoices(user_id, created_at)')
    op.execute('CREATE INDEX idx_invoices_user_status ON invoices(user_id, status)')

    op.execute('''
        CREATE TABLE quotes (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            client_id UUID NOT NULL REFERENCES clients(id) ON DELETE RESTRICT,
            project_id UUID REFERENCES projects(id) ON DELETE SET NULL,
            quote_number VARCHAR(50) UNIQUE NOT NULL,
            title VARCHAR(255) NOT NULL,
            description TEXT,
            amount NUMERIC(10, 2) NOT NULL,
            tax_amount NUMERIC(10, 2) NOT NULL DEFAULT 0,
            total_amount NUMERIC(10, 2) NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'draft',
            valid_until TIMESTAMPTZ,
            notes TEXT,
            template_variant VARCHAR(1) NOT NULL DEFAULT 'A',
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_quotes_user_created ON quotes(user_id, created_at)')

    op.execute('''
        CREATE TABLE document_counters (
            counter_type VARCHAR(10) NOT NULL,
            year INTEGER NOT NULL,
            current_value BIGINT NOT NULL DEFAULT 0,
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            PRIMARY KEY (counter_type, year)
        )
    ''')

    # ==========================================================================
    # Documents
    # ==========================================================================
    op.execute('''
        CREATE TABLE documents (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            client_id UUID REFERENCES clients(id) ON DELETE SET NULL,
            project_id UUID REFERENCES projects(id) ON DELETE SET NULL,
            invoice_id UUID REFERENCES invoices(id) ON DELETE SET NULL,
            quote_id UUID REFERENCES quotes(id) ON DELETE SET NULL,
            name VARCHAR(255) NOT NULL,
            type VARCHAR(50) NOT NULL,
            file_path VARCHAR(1000) NOT NULL,
            file_size INTEGER,
            mime_type VARCHAR(255),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_documents_user_created ON documents(user_id, created_at)')
    op.execute('CREATE INDEX idx_documents_user_type ON documents(user_id, type)')

    # ==========================================================================
    # Payment keys (encrypted at rest)
    # ==========================================================================
    op.execute('''
        CREATE TABLE payment_api_keys (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            provider VARCHAR(50) NOT NULL,
            key_name VARCHAR(100) NOT NULL,
            encrypted_key TEXT NOT NULL,
            is_active BOOLEAN NOT NULL DEFAULT true,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute(
        'CREATE INDEX idx_payment_keys_provider '
        'ON payment_api_keys(provider, key_name, is_active)'
    )

    # ==========================================================================
    # A/B tests
    # ==========================================================================
    op.execute('''
        CREATE TABLE ab_tests (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(255) NOT NULL,
            description TEXT,
            type VARCHAR(50) NOT NULL,
            variant_a JSONB NOT NULL,
            variant_b JSONB NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'draft',
            start_date TIMESTAMPTZ,
            end_date TIMESTAMPTZ,
            success_metric VARCHAR(100) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')

    op.execute('''
        CREATE TABLE ab_test_results (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            test_id UUID NOT NULL REFERENCES ab_tests(id) ON DELETE CASCADE,
            entity_id VARCHAR(64) NOT NULL,
            entity_type VARCHAR(50) NOT NULL,
            variant VARCHAR(1) NOT NULL,
            success BOOLEAN NOT NULL DEFAULT false,
            recorded_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_ab_results_test ON ab_test_results(test_id, recorded_at)')

    # ==========================================================================
    # Activity log (append-only)
    # ==========================================================================
    op.execute('''
        CREATE TABLE activity_logs (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            action VARCHAR(50) NOT NULL,
            entity_type VARCHAR(50),
            entity_id VARCHAR(64),
            details JSONB,
            ip_address VARCHAR(64),
            user_agent TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_activity_created ON activity_logs(created_at)')
    op.execute('CREATE INDEX idx_activity_user_created ON activity_logs(user_id, created_at)')


def downgrade() -> None:
    """Drop all tables."""
    for table in (
        'activity_logs',
        'ab_test_results',
        'ab_tests',
        'payment_api_keys',
        'documents',
        'document_counters',
        'quotes',
        'invoices',
        'time_entries',
        'projects',
        'clients',
        'users',
    ):
        op.execute(f'DROP TABLE IF EXISTS {table}')
