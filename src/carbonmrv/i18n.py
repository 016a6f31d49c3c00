"""English and Hindi labels for dashboards, CLI output and reports."""

from typing import Literal

Language = Literal["en", "hi"]

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        # Navigation
        "dashboard": "Dashboard",
        "farms": "My Farms",
        "submissions": "Submissions",
        "reports": "Reports",
        # Farmer dashboard
        "total_farms": "Total Farms",
        "total_credits": "Carbon Credits",
        "pending_submissions": "Pending Submissions",
        "verified_submissions": "Verified Submissions",
        "total_submissions": "Total Submissions",
        # Farm details
        "farm_details": "Farm Details",
        "farm_name": "Farm Name",
        "crop_type": "Crop Type",
        "land_size": "Land Size (hectares)",
        "gps_location": "GPS Location",
        "farming_practices": "Farming Practices",
        "water_management": "Water Management",
        "fertilizer_usage": "Fertilizer Usage",
        "agroforestry_methods": "Agroforestry Methods",
        # Crop types
        "rice": "Rice",
        "agroforestry": "Agroforestry",
        "mixed_crops": "Mixed Crops",
        "vegetables": "Vegetables",
        # Water management
        "continuous_flooding": "Continuous Flooding",
        "alternate_wetting_drying": "Alternate Wetting & Drying",
        "rainfed": "Rainfed",
        # Agroforestry methods
        "tree_plantation": "Tree Plantation",
        "silviculture": "Silviculture",
        "intercropping": "Intercropping",
        "boundary_planting": "Boundary Planting",
        # Status
        "pending": "Pending",
        "verified": "Verified",
        "rejected": "Rejected",
        # Estimate
        "biomass_estimate": "Biomass Estimate",
        "soil_sequestration": "Soil Sequestration",
        "methane_reduction": "Methane Reduction",
        "confidence": "Confidence",
        # Verifier dashboard
        "farmer_submissions": "Farmer Submissions",
        "verifier_dashboard": "Verifier Dashboard",
        "generate_report": "Generate Report",
        "export_pdf": "Export PDF",
        "export_csv": "Export CSV",
        # Messages
        "no_data": "No data available",
        "carbon_credits_tooltip": "Estimated carbon credits based on your farming practices",
        "confidence_tooltip": "AI confidence level in the estimation",
    },
    "hi": {
        "dashboard": "डैशबोर्ड",
        "farms": "मेरे खेत",
        "submissions": "प्रस्तुतियाँ",
        "reports": "रिपोर्ट",
        "total_farms": "कुल खेत",
        "total_credits": "कार्बन क्रेडिट",
        "pending_submissions": "लंबित प्रस्तुतियाँ",
        "verified_submissions": "सत्यापित प्रस्तुतियाँ",
        "total_submissions": "कुल सबमिशन",
        "farm_details": "खेत का विवरण",
        "farm_name": "खेत का नाम",
        "crop_type": "फसल का प्रकार",
        "land_size": "भूमि का आकार (हेक्टेयर)",
        "gps_location": "जीपीएस स्थान",
        "farming_practices": "कृषि पद्धतियाँ",
        "water_management": "जल प्रबंधन",
        "fertilizer_usage": "उर्वरक का उपयोग",
        "rice": "धान",
        "agroforestry": "कृषि वानिकी",
        "mixed_crops": "मिश्रित फसल",
        "vegetables": "सब्जियाँ",
        "continuous_flooding": "निरंतर बाढ़",
        "alternate_wetting_drying": "वैकल्पिक गीला और सूखा",
        "rainfed": "वर्षा आधारित",
        "tree_plantation": "वृक्षारोपण",
        "silviculture": "वन संवर्धन",
        "intercropping": "अंतर फसल",
        "boundary_planting": "सीमा रोपण",
        "pending": "लंबित",
        "verified": "सत्यापित",
        "rejected": "अस्वीकृत",
        "farmer_submissions": "किसान प्रस्तुतियाँ",
        "verifier_dashboard": "सत्यापनकर्ता डैशबोर्ड",
        "generate_report": "रिपोर्ट तैयार करें",
        "export_pdf": "पीडीएफ निर्यात",
        "export_csv": "सीएसवी निर्यात",
        "no_data": "कोई डेटा उपलब्ध नहीं",
        "carbon_credits_tooltip": "आपकी कृषि पद्धतियों के आधार पर अनुमानित कार्बन क्रेडिट",
        "confidence_tooltip": "अनुमान में AI विश्वास स्तर",
    },
}

CROP_TYPE_OPTIONS = ("rice", "agroforestry", "mixed_crops", "vegetables")
WATER_MANAGEMENT_OPTIONS = ("continuous_flooding", "alternate_wetting_drying", "rainfed")
AGROFORESTRY_METHOD_OPTIONS = ("tree_plantation", "silviculture", "intercropping", "boundary_planting")


def translate(key: str, language: str = "en") -> str:
    """
    Look up a label, falling back to English when the language lacks it.

    Raises:
        KeyError: If the key has no English label either
    """
    table = TRANSLATIONS.get(language, TRANSLATIONS["en"])
    if key in table:
        return table[key]
    return TRANSLATIONS["en"][key]


def options(values: tuple[str, ...], language: str = "en") -> list[tuple[str, str]]:
    """(value, label) pairs for a select list."""
    return [(value, translate(value, language)) for value in values]
