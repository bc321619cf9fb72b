# 📄 File: plantscope/modules/plant_lookup/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# The web-facing part of the plant lookup module
