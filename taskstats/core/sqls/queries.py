"""
Database query SQL statements
Contains all SELECT and INSERT statements used by the record store
"""

# Task columns re-labelled with a "task_" prefix so they can sit next to the
# owning category/project columns in a single joined row.
_JOINED_TASK_COLUMNS = """
        t.id AS task_id,
        t.title AS task_title,
        t.status AS task_status,
        t.urgency AS task_urgency,
        t.importance AS task_importance,
        t.due_date AS task_due_date,
        t.created_at AS task_created_at,
        t.updated_at AS task_updated_at,
        t.category_id AS task_category_id,
        t.project_id AS task_project_id,
        t.parent_task_id AS task_parent_task_id,
        t.user_id AS task_user_id
"""

# Insert statements
INSERT_CATEGORY = """
    INSERT INTO categories (name, user_id)
    VALUES (?, ?)
"""

INSERT_PROJECT = """
    INSERT INTO projects (name, status, user_id)
    VALUES (?, ?, ?)
"""

INSERT_TASK = """
    INSERT INTO tasks (
        title, status, urgency, importance, due_date, created_at, updated_at,
        category_id, project_id, parent_task_id, user_id
    )
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

# Task queries
SELECT_TASKS_BY_USER = """
    SELECT * FROM tasks
    WHERE {where}
    ORDER BY created_at ASC, id ASC
"""

# Main tasks with any of created/updated/due inside [year_start, next_year_start).
# Bounds are plain YYYY-MM-DD strings so date-only due dates compare correctly
# against full ISO timestamps.
SELECT_MAIN_TASKS_TOUCHING_RANGE = """
    SELECT t.*, p.name AS project_name
    FROM tasks t
    LEFT JOIN projects p ON p.id = t.project_id AND p.user_id = t.user_id
    WHERE t.user_id = ?
      AND t.parent_task_id IS NULL
      AND (
        (t.created_at >= ? AND t.created_at < ?)
        OR (t.updated_at >= ? AND t.updated_at < ?)
        OR (t.due_date IS NOT NULL AND t.due_date >= ? AND t.due_date < ?)
      )
    ORDER BY t.id ASC
"""

# Project queries
SELECT_PROJECTS_BY_USER = """
    SELECT * FROM projects
    WHERE user_id = ?
    ORDER BY id ASC
"""

SELECT_PROJECTS_WITH_MAIN_TASKS = f"""
    SELECT
        p.id AS project_id,
        p.name AS project_name,
        p.status AS project_status,
        p.user_id AS project_user_id,
{_JOINED_TASK_COLUMNS}
    FROM projects p
    LEFT JOIN tasks t
        ON t.project_id = p.id
        AND t.user_id = p.user_id
        AND t.parent_task_id IS NULL
    WHERE p.user_id = ?
    ORDER BY p.id ASC, t.id ASC
"""

# Category queries
SELECT_CATEGORIES_WITH_MAIN_TASKS = f"""
    SELECT
        c.id AS category_id,
        c.name AS category_name,
        c.user_id AS category_user_id,
{_JOINED_TASK_COLUMNS}
    FROM categories c
    LEFT JOIN tasks t
        ON t.category_id = c.id
        AND t.user_id = c.user_id
        AND t.parent_task_id IS NULL
    WHERE c.user_id = ?
    ORDER BY c.id ASC, t.id ASC
"""
