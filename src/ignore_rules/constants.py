"""
Central configuration for ignore rule compilation
"""

# Conventional name of an ignore file; callers pass explicit paths to
# compile_file(), this is only a default for helpers
DEFAULT_IGNORE_FILENAME = ".gitignore"

# Ignore files are decoded with this encoding (undecodable bytes are replaced)
IGNORE_FILE_ENCODING = "utf-8"

# Glob syntax
COMMENT_CHAR = "#"
NEGATION_CHAR = "!"
ESCAPE_CHAR = "\\"
PATH_SEPARATOR = "/"
DOUBLE_STAR = "**"

# Whitespace stripped from the end of a line unless escaped
TRAILING_WHITESPACE = " \t"

# Logging configuration (environment overrides)
LOG_LEVEL_ENV = "IGNORE_RULES_LOG_LEVEL"
FALLBACK_LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_JSON_ENV = "IGNORE_RULES_LOG_JSON"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Lint thresholds
OVERLY_BROAD_PATTERNS = frozenset(["*", "**", "**/*"])
