# 📄 File: plantscope/modules/plant_lookup/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything needed to look up a plant or a plant disease: gathering facts from several sources,
# filling gaps from backup sources, and finding matching pictures
# 🧪 Purpose (Technical Summary):
# Plant lookup module: domain (records, plans, orchestrator, image aggregator), application
# (queries, plans, handlers), infrastructure (provider clients) and presentation (FastAPI routers)
# 🔄 Connected Modules / Calls From:
# plantscope.api.v1.router, plantscope.main
