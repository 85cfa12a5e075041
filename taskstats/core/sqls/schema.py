"""
Database schema definitions
Contains all CREATE TABLE and CREATE INDEX statements
"""

# Table creation statements
CREATE_CATEGORIES_TABLE = """
    CREATE TABLE IF NOT EXISTS categories (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        user_id INTEGER NOT NULL,
        created_at TEXT DEFAULT CURRENT_TIMESTAMP
    )
"""

CREATE_PROJECTS_TABLE = """
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'planning',
        user_id INTEGER NOT NULL,
        created_at TEXT DEFAULT CURRENT_TIMESTAMP,
        updated_at TEXT DEFAULT CURRENT_TIMESTAMP
    )
"""

CREATE_TASKS_TABLE = """
    CREATE TABLE IF NOT EXISTS tasks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'pending',
        urgency BOOLEAN NOT NULL DEFAULT 0,
        importance BOOLEAN NOT NULL DEFAULT 0,
        due_date TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        category_id INTEGER REFERENCES categories(id) ON DELETE SET NULL,
        project_id INTEGER REFERENCES projects(id) ON DELETE SET NULL,
        parent_task_id INTEGER REFERENCES tasks(id) ON DELETE CASCADE,
        user_id INTEGER NOT NULL
    )
"""

# Index creation statements
CREATE_TASKS_USER_PARENT_INDEX = """
    CREATE INDEX IF NOT EXISTS idx_tasks_user_parent
    ON tasks(user_id, parent_task_id)
"""

CREATE_TASKS_CATEGORY_INDEX = """
    CREATE INDEX IF NOT EXISTS idx_tasks_category
    ON tasks(category_id)
"""

CREATE_TASKS_PROJECT_INDEX = """
    CREATE INDEX IF NOT EXISTS idx_tasks_project
    ON tasks(project_id)
"""

CREATE_PROJECTS_USER_INDEX = """
    CREATE INDEX IF NOT EXISTS idx_projects_user
    ON projects(user_id)
"""

CREATE_CATEGORIES_USER_INDEX = """
    CREATE INDEX IF NOT EXISTS idx_categories_user
    ON categories(user_id)
"""

ALL_TABLES = [
    CREATE_CATEGORIES_TABLE,
    CREATE_PROJECTS_TABLE,
    CREATE_TASKS_TABLE,
]

ALL_INDEXES = [
    CREATE_TASKS_USER_PARENT_INDEX,
    CREATE_TASKS_CATEGORY_INDEX,
    CREATE_TASKS_PROJECT_INDEX,
    CREATE_PROJECTS_USER_INDEX,
    CREATE_CATEGORIES_USER_INDEX,
]
