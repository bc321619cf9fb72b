# 📄 File: plantscope/modules/plant_lookup/application/field_mappings.py
# 🧭 Purpose (Layman Explanation):
# A translation dictionary per data source: "their field called X is our field called Y"
# 🧪 Purpose (Technical Summary):
# Declarative mapping tables (canonical dotted path -> raw dotted path, optional list/text coercion)
# consumed by the Record Normalizer, plus the canonical field-group definitions for each record kind
# 🔗 Dependencies:
# typing, domain record normalizer coercion names
# 🔄 Connected Modules / Calls From:
# application.plans, identification handler

from typing import Dict, Iterable, List, Optional

from ..domain.models.plan import FieldMapping
from ..domain.services.record_normalizer import COERCE_LIST, COERCE_TEXT

TAXONOMY_RANKS = ["kingdom", "phylum", "class", "order", "family", "genus", "species"]
MORPHOLOGY_FIELDS = ["height", "spread", "leaves", "flowers", "fruits", "bark", "roots", "growthHabit"]
CULTIVATION_FIELDS = ["soilType", "sunlight", "waterNeeds", "temperature", "hardiness", "spacing"]
MAINTENANCE_FIELDS = ["pruning", "fertilization", "pestManagement", "diseaseManagement", "seasonalCare"]
SAFETY_FIELDS = ["edibleParts", "propagationMethods"]
CONDITION_FIELDS = ["temperature", "humidity", "moisture", "season"]
TREATMENT_FIELDS = ["chemical", "biological", "cultural", "organic"]


def _nested(canonical: str, raw: str, fields: Iterable[str], coercion: Optional[str] = None) -> FieldMapping:
    mapping: FieldMapping = {}
    for field in fields:
        raw_path = f"{raw}.{field}"
        mapping[f"{canonical}.{field}"] = (raw_path, coercion) if coercion else raw_path
    return mapping


# =============================================================================
# FIELD GROUPS
# =============================================================================

PLANT_TAXONOMY_FIELDS = ["scientificName", "gbifId", "taxonomy"]
PLANT_PROFILE_FIELDS = [
    "commonNames", "description", "wikiDescription", "synonyms", "facts",
    "morphology", "cultivation", "maintenance", "uses", "safety", "additionalInformation",
]
PLANT_RANGE_FIELDS = ["nativeRange", "conservationStatus", "habitat", "threats"]

DISEASE_OVERVIEW_FIELDS = [
    "diseaseName", "scientificName", "commonNames", "overview", "symptoms", "causes",
    "affectedPlants", "affectedParts", "spreadMechanism", "lifecycle",
]
DISEASE_MANAGEMENT_FIELDS = [
    "environmentalConditions", "treatment", "prevention", "economicImpact",
    "diagnosticMethods", "differentialDiagnosis", "additionalInformation",
]

WEATHER_FIELDS = ["weather"]


# =============================================================================
# PLANT.ID (top suggestion of an identify response)
# =============================================================================

PLANT_ID_MAPPING: FieldMapping = {
    "scientificName": "plant_name",
    "commonNames": ("plant_details.common_names", COERCE_LIST),
    "description": "plant_details.description",
    "wikiDescription": "plant_details.wiki_description",
    "gbifId": "plant_details.gbif_id",
    "synonyms": ("plant_details.synonyms", COERCE_LIST),
    "taxonomy.kingdom": "plant_details.taxonomy.kingdom",
    "taxonomy.phylum": "plant_details.taxonomy.phylum",
    "taxonomy.class": "plant_details.taxonomy.class",
    "taxonomy.order": "plant_details.taxonomy.order",
    "taxonomy.family": "plant_details.taxonomy.family",
    "taxonomy.genus": "plant_details.taxonomy.genus",
    "taxonomy.species": "plant_details.scientific_name",
    "safety.edibleParts": ("plant_details.edible_parts", COERCE_LIST),
    "safety.propagationMethods": ("plant_details.propagation_methods", COERCE_LIST),
}


# =============================================================================
# GENERATIVE TEXT (Gemini and Perplexity share the prompt, so the mapping too)
# =============================================================================

GENERATIVE_PLANT_MAPPING: FieldMapping = {
    "scientificName": "scientificName",
    "commonNames": ("commonName", COERCE_LIST),
    "description": ("description", COERCE_TEXT),
    "synonyms": ("synonyms", COERCE_LIST),
    **{f"taxonomy.{rank}": f"taxonomy.{rank}" for rank in TAXONOMY_RANKS},
    "nativeRange": ("nativeRange", COERCE_TEXT),
    "conservationStatus": ("conservationStatus", COERCE_TEXT),
    "habitat": ("habitat", COERCE_TEXT),
    "threats": ("threats", COERCE_LIST),
    "facts": ("facts", COERCE_LIST),
    **_nested("morphology", "morphologicalCharacteristics", MORPHOLOGY_FIELDS, COERCE_TEXT),
    **_nested("cultivation", "cultivationRequirements", CULTIVATION_FIELDS, COERCE_TEXT),
    **_nested("maintenance", "maintenanceGuidelines", MAINTENANCE_FIELDS, COERCE_TEXT),
    **_nested("safety", "safety", SAFETY_FIELDS, COERCE_LIST),
    "uses": ("practicalUses", COERCE_LIST),
    "additionalInformation": ("additionalInformation", COERCE_LIST),
}

GENERATIVE_DISEASE_MAPPING: FieldMapping = {
    "diseaseName": "diseaseName",
    "scientificName": ("scientificName", COERCE_TEXT),
    "commonNames": ("commonNames", COERCE_LIST),
    "overview": ("overview", COERCE_TEXT),
    "symptoms": ("symptoms", COERCE_LIST),
    "causes": ("causes", COERCE_LIST),
    "affectedPlants": ("affectedPlants", COERCE_LIST),
    "affectedParts": ("affectedParts", COERCE_LIST),
    **_nested("environmentalConditions", "environmentalConditions", CONDITION_FIELDS, COERCE_TEXT),
    "spreadMechanism": ("spreadMechanism", COERCE_TEXT),
    **_nested("treatment", "treatment", TREATMENT_FIELDS, COERCE_LIST),
    "prevention": ("prevention", COERCE_LIST),
    "lifecycle": ("lifecycle", COERCE_TEXT),
    "economicImpact": ("economicImpact", COERCE_TEXT),
    "diagnosticMethods": ("diagnosticMethods", COERCE_LIST),
    "differentialDiagnosis": ("differentialDiagnosis", COERCE_LIST),
    "additionalInformation": ("additionalInformation", COERCE_LIST),
}


# =============================================================================
# GBIF
# =============================================================================

GBIF_MATCH_MAPPING: FieldMapping = {
    "scientificName": "canonicalName",
    "gbifId": "usageKey",
    **{f"taxonomy.{rank}": rank for rank in TAXONOMY_RANKS},
}

GBIF_SPECIES_MAPPING: FieldMapping = {
    "conservationStatus": "conservationStatus.status",
    "nativeRange": ("distribution.native", COERCE_TEXT),
    "habitat": ("habitat", COERCE_TEXT),
    "threats": ("threats", COERCE_LIST),
}


# =============================================================================
# OPENWEATHER
# =============================================================================

OPENWEATHER_MAPPING: FieldMapping = {
    "weather.temperature": "main.temp",
    "weather.humidity": "main.humidity",
    "weather.conditions": "weather.0.main",
    "weather.description": "weather.0.description",
    "weather.windSpeed": "wind.speed",
    "weather.pressure": "main.pressure",
    "weather.observedAt": "dt",
    "weather.location": "name",
}


# =============================================================================
# DERIVED FIELDS
# =============================================================================

USE_CATEGORIES: Dict[str, List[str]] = {
    "medicinal": ["medicinal"],
    "ornamental": ["ornamental", "landscape"],
    "wildlife": ["wildlife", "pollinator"],
    "cultural": ["cultural", "historical"],
}

ADDITIONAL_INFO_CATEGORIES: Dict[str, List[str]] = {
    "propagationNotes": ["propagation"],
    "companionPlants": ["companion"],
}
