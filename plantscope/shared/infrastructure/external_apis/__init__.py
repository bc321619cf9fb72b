# 📄 File: plantscope/shared/infrastructure/external_apis/__init__.py

# 🧭 Purpose (Layman Explanation):
# Groups the shared building blocks for talking to outside data providers.

# 🧪 Purpose (Technical Summary):
# Exposes the generic APIClient and the provider categories used by health reporting.

# 🔄 Connected Modules / Calls From:
# Used by: plant_lookup provider clients, health endpoints

"""
External APIs Infrastructure Module

Every provider client wraps one APIClient instance. Provider failures are
always typed (see plantscope.shared.core.exceptions) so the fallback
orchestrator can downgrade them to manifest entries.
"""

from .api_client import APIClient

# Provider categories for organization
API_CATEGORIES = {
    'plant_identification': ['plant_id'],
    'generative_text': ['gemini', 'perplexity'],
    'taxonomy': ['gbif'],
    'media_search': ['wikimedia', 'unsplash'],
    'weather': ['openweather'],
}

__all__ = ["APIClient", "API_CATEGORIES"]
