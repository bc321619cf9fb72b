# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/prompts.py
# 🧭 Purpose (Layman Explanation):
# The exact questions we ask the AI models, each asking for the answer in a fixed data layout
# 🧪 Purpose (Technical Summary):
# Prompt templates for generative-text providers; the JSON keys requested here are the raw paths
# used by the Gemini/Perplexity mapping tables
# 🔄 Connected Modules / Calls From:
# application.plans (generative descriptors)

PLANT_SYSTEM_PROMPT = "You are a botanical expert. Provide accurate and detailed information about plants."
DISEASE_SYSTEM_PROMPT = "You are a plant pathologist. Provide accurate and detailed information about plant diseases."

PLANT_PROMPT_TEMPLATE = """You are a botanical expert. Provide detailed information about the plant "{name}".

Do NOT say "Information not available". If a detail is unknown, leave the field as an empty string or empty array.

Return your response in this exact JSON format:

{{
  "commonName": "common name(s), comma separated",
  "scientificName": "{name}",
  "description": "a short botanical description",
  "synonyms": ["botanical synonyms"],
  "taxonomy": {{
    "kingdom": "Plantae",
    "phylum": "phylum/division",
    "class": "class",
    "order": "order",
    "family": "family",
    "genus": "genus",
    "species": "species epithet with genus"
  }},
  "nativeRange": "geographic origin or native regions",
  "conservationStatus": "IUCN status if known",
  "habitat": "natural habitat",
  "threats": ["threats to wild populations"],
  "facts": ["at least 3 interesting facts"],
  "morphologicalCharacteristics": {{
    "height": "", "spread": "", "leaves": "", "flowers": "",
    "fruits": "", "bark": "", "roots": "", "growthHabit": ""
  }},
  "cultivationRequirements": {{
    "soilType": "", "sunlight": "", "waterNeeds": "",
    "temperature": "", "hardiness": "", "spacing": ""
  }},
  "maintenanceGuidelines": {{
    "pruning": "", "fertilization": "", "pestManagement": "",
    "diseaseManagement": "", "seasonalCare": ""
  }},
  "safety": {{
    "edibleParts": ["edible parts, if any"],
    "propagationMethods": ["propagation methods"]
  }},
  "practicalUses": [
    "medicinal uses", "ornamental/landscaping uses",
    "wildlife value (pollinators, birds)", "cultural or historical significance"
  ],
  "additionalInformation": [
    "propagation methods", "companion plants", "special growing considerations"
  ]
}}"""

DISEASE_PROMPT_TEMPLATE = """Provide comprehensive information about the plant disease "{name}" in the following JSON format. Please ensure all information is accurate and scientifically sound:

{{
  "diseaseName": "{name}",
  "scientificName": "string (if applicable)",
  "commonNames": ["array of alternate names"],
  "overview": "comprehensive description of the disease",
  "symptoms": ["detailed array of symptoms"],
  "causes": ["array of causative agents and factors"],
  "affectedPlants": ["array of commonly affected plant species"],
  "affectedParts": ["array of plant parts commonly affected"],
  "environmentalConditions": {{
    "temperature": "optimal temperature range for disease development",
    "humidity": "humidity requirements",
    "moisture": "moisture conditions",
    "season": "seasons when disease is most prevalent"
  }},
  "spreadMechanism": "how the disease spreads",
  "treatment": {{
    "chemical": ["chemical treatment options"],
    "biological": ["biological control methods"],
    "cultural": ["cultural management practices"],
    "organic": ["organic treatment options"]
  }},
  "prevention": ["preventive measures"],
  "lifecycle": "lifecycle of the pathogen",
  "economicImpact": "impact on agriculture and economy",
  "diagnosticMethods": ["methods to identify the disease"],
  "differentialDiagnosis": ["similar diseases to distinguish from"],
  "additionalInformation": ["additional relevant facts"]
}}

If information is not available for a specific field, use an empty array [] or empty string "" but do not use "Information not available"."""


def plant_prompt(name: str) -> str:
    return PLANT_PROMPT_TEMPLATE.format(name=name)


def disease_prompt(name: str) -> str:
    return DISEASE_PROMPT_TEMPLATE.format(name=name)
