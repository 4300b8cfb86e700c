"""Initial schema: users, projects, pages, templates, analytics, with RLS policies.

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""

from alembic import op


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Reads app.user_id without failing when it is unset or empty
    op.execute("""
        CREATE OR REPLACE FUNCTION get_app_user_id() RETURNS uuid AS $$
        DECLARE
            val text;
        BEGIN
            val := current_setting('app.user_id', true);
            IF val IS NULL OR val = '' THEN
                RETURN NULL;
            END IF;
            RETURN val::uuid;
        END;
        $$ LANGUAGE plpgsql STABLE;
    """)

    # Users are provisioned by the identity provider
    op.execute("""
        CREATE TABLE users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            email TEXT UNIQUE NOT NULL,
            name TEXT,
            created_at TIMESTAMPTZ DEFAULT now()
        );
    """)

    op.execute("ALTER TABLE users ENABLE ROW LEVEL SECURITY;")
    op.execute("ALTER TABLE users FORCE ROW LEVEL SECURITY;")

    op.execute("""
        CREATE POLICY users_select_own ON users
        FOR SELECT
        USING (get_app_user_id() IS NULL OR id = get_app_user_id());
    """)

    op.execute("""
        CREATE TABLE projects (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            description TEXT,
            domain TEXT,
            subdomain TEXT,
            is_published BOOLEAN NOT NULL DEFAULT false,
            theme_settings JSONB,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)

    op.execute("CREATE INDEX idx_projects_user ON projects(user_id);")
    op.execute("CREATE INDEX idx_projects_updated ON projects(user_id, updated_at DESC);")

    op.execute("ALTER TABLE projects ENABLE ROW LEVEL SECURITY;")
    op.execute("ALTER TABLE projects FORCE ROW LEVEL SECURITY;")

    op.execute("""
        CREATE POLICY projects_all_own ON projects
        FOR ALL
        USING (user_id = get_app_user_id())
        WITH CHECK (user_id = get_app_user_id());
    """)

    op.execute("""
        CREATE TABLE pages (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            project_id UUID NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            title TEXT NOT NULL,
            slug TEXT NOT NULL,
            content TEXT NOT NULL DEFAULT '',
            meta_description TEXT,
            meta_keywords TEXT,
            is_published BOOLEAN NOT NULL DEFAULT false,
            order_index INTEGER NOT NULL DEFAULT 0,
            parent_id UUID REFERENCES pages(id) ON DELETE SET NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)

    op.execute("CREATE INDEX idx_pages_project ON pages(project_id, order_index);")

    # Pages belong to users via projects
    op.execute("ALTER TABLE pages ENABLE ROW LEVEL SECURITY;")
    op.execute("ALTER TABLE pages FORCE ROW LEVEL SECURITY;")

    op.execute("""
        CREATE POLICY pages_all_own ON pages
        FOR ALL
        USING (
            project_id IN (SELECT id FROM projects WHERE user_id = get_app_user_id())
        )
        WITH CHECK (
            project_id IN (SELECT id FROM projects WHERE user_id = get_app_user_id())
        );
    """)

    # Shared catalogue, read via system_conn only
    op.execute("""
        CREATE TABLE templates (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name TEXT NOT NULL,
            description TEXT,
            content TEXT NOT NULL,
            preview_image TEXT,
            category TEXT NOT NULL DEFAULT 'general',
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)

    op.execute("""
        CREATE TABLE analytics (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            project_id UUID NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            page_id UUID REFERENCES pages(id) ON DELETE SET NULL,
            event_type TEXT NOT NULL,
            event_data JSONB,
            timestamp TIMESTAMPTZ NOT NULL DEFAULT now(),
            user_agent TEXT,
            ip_address TEXT
        );
    """)

    op.execute("CREATE INDEX idx_analytics_project ON analytics(project_id, timestamp DESC);")

    op.execute("ALTER TABLE analytics ENABLE ROW LEVEL SECURITY;")
    op.execute("ALTER TABLE analytics FORCE ROW LEVEL SECURITY;")

    op.execute("""
        CREATE POLICY analytics_select_own ON analytics
        FOR SELECT
        USING (
            project_id IN (SELECT id FROM projects WHERE user_id = get_app_user_id())
        );
    """)


def downgrade():
    op.execute("DROP TABLE IF EXISTS analytics CASCADE;")
    op.execute("DROP TABLE IF EXISTS templates CASCADE;")
    op.execute("DROP TABLE IF EXISTS pages CASCADE;")
    op.execute("DROP TABLE IF EXISTS projects CASCADE;")
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS get_app_user_id();")
