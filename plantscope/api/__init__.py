# 📄 File: plantscope/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The front door of the service: versioned routes, health checks and request helpers
# 🔄 Connected Modules / Calls From:
# plantscope.main
