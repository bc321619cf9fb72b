# 📄 File: plantscope/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the public web API
# 🔄 Connected Modules / Calls From:
# plantscope.main

API_VERSION = "v1"
API_PREFIX = "/api/v1"

from .router import api_v1_router  # noqa: E402

__all__ = ["API_PREFIX", "API_VERSION", "api_v1_router"]
