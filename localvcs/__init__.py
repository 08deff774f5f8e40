"""
localvcs - local in-process version control

Tracks named files, stages edits until an explicit commit, and keeps the
revision history of every file across renames.
"""

__version__ = "0.1.0"

# Configuration is available at top level for convenience
from localvcs.config import config
from localvcs.version_control import LocalVcs, Revision

__all__ = ["config", "LocalVcs", "Revision", "__version__"]
