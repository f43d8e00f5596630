import os

# Must be set before config.settings is first imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
