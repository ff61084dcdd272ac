"""archview - architecture model views.

archview turns a model of people, software systems, containers, components
and deployment nodes into filtered, ordered views ready for rendering.
"""

__version__ = "0.1.0"
__description__ = "Architecture model view materialization"

from archview.config import ArchviewConfig, load_config
from archview.model import ModelBuilder
from archview.views import ViewSet
from archview.workspace import Workspace, build_workspace

__all__ = [
    "__version__",
    "__description__",
    "ArchviewConfig",
    "load_config",
    "ModelBuilder",
    "ViewSet",
    "Workspace",
    "build_workspace",
]
