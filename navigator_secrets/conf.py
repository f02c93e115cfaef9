"""Environment variable names and defaults used by navigator_secrets."""

ENCRYPTION_KEY_ENV = 'ENCRYPTION_KEY'
STRICT_FRAMES_ENV = 'ENCRYPTION_STRICT_FRAMES'

# values accepted as "true" for boolean environment flags
TRUTHY_VALUES = frozenset({'1', 'true', 'yes', 'on'})
