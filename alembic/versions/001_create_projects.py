"""Projects and AI content log.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from alembic import op

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # One JSONB document per project: pages, legacy sections mirror, settings
    op.execute("""
        CREATE TABLE projects (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL DEFAULT 'Untitled Project',
            document JSONB NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)

    op.execute("""
        CREATE INDEX idx_projects_updated_at ON projects(updated_at DESC);
    """)

    op.execute("""
        CREATE TABLE ai_generated_content (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            project_id TEXT NOT NULL,
            content_type TEXT NOT NULL,
            prompt TEXT NOT NULL,
            generated_text TEXT NOT NULL,
            tone TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)

    op.execute("""
        CREATE INDEX idx_ai_generated_content_project ON ai_generated_content(project_id);
    """)


def downgrade():
    op.execute("DROP TABLE IF EXISTS ai_generated_content;")
    op.execute("DROP TABLE IF EXISTS projects;")
