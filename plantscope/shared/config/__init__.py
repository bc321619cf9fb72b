# 📄 File: plantscope/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell PlantScope which outside services to call
# and how patient to be with them.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization with exports for settings management.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - plantscope.main (application startup)
# - All modules requiring configuration

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
