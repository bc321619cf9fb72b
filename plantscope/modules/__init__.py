# 📄 File: plantscope/modules/__init__.py
# 🧭 Purpose (Layman Explanation):
# Home of the feature modules of the service
# 🔄 Connected Modules / Calls From:
# plantscope.api.v1.router
