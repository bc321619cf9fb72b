# 📄 File: plantscope/modules/plant_lookup/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# The "use case" layer: turns a question into the right sequence of data-source calls
# 🧪 Purpose (Technical Summary):
# Query objects, per-provider field mapping tables, Fallback Plan builders and query handlers
# 🔄 Connected Modules / Calls From:
# presentation layer
