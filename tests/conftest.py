import os


# Only warnings and errors reach the JSON log handler during tests.
os.environ.setdefault("LISTTREE_LOG_LEVEL", "WARNING")
