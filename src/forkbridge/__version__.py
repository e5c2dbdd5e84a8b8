"""Version information for forkbridge.

Single source of truth for version number.
Follows PEP 440 and semantic versioning principles.
"""

__version__ = "1.2.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))

# Version history:
# 1.2.0 - Lazy repository pagination, bounded fork visibility polling
# 1.1.0 - Fork create-or-adopt, structured logging
# 1.0.0 - OAuth login and repository listing
