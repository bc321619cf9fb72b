# 📄 File: plantscope/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The main entry point that tells Python this folder contains the PlantScope application code
# and sets up the basic version and package information.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version info and package metadata
# for the PlantScope FastAPI aggregation service.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - plantscope.main (application entry point)
# - pyproject.toml (dynamic version)

"""
PlantScope - Plant and Disease Identification Backend

A thin backend that calls plant identification, taxonomy, generative-text,
media search and weather providers, and merges what they return into one
coherent record per plant or plant disease.
"""

__version__ = "1.0.0"
__title__ = "PlantScope Backend API"
__description__ = "Plant and plant-disease identification backed by botanical data providers"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
