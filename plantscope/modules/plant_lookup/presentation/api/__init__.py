# 📄 File: plantscope/modules/plant_lookup/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints and the shapes of their requests and responses
