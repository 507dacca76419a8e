"""Static 2024 tax reference data.

Raw tables only; :mod:`homecalc.tables` turns them into typed, read-only
structures.  Rates are fractions (``0.0425`` for 4.25%).  Local entries use a
small schema: ``percentage``/``fixed`` carry ``value``, ``range`` carries
``min``/``max`` and ``per_period`` carries a dollar ``amount`` charged each
pay period.
"""
from __future__ import annotations

# Single filer, 2024.
FEDERAL_TAX_BRACKETS = [
    {"min": 0, "max": 11600, "rate": 0.10},
    {"min": 11600, "max": 47150, "rate": 0.12},
    {"min": 47150, "max": 100525, "rate": 0.22},
    {"min": 100525, "max": 191950, "rate": 0.24},
    {"min": 191950, "max": 243725, "rate": 0.32},
    {"min": 243725, "max": 609350, "rate": 0.35},
    {"min": 609350, "max": None, "rate": 0.37},
]

FICA_RATES = {
    "social_security": 0.062,
    "medicare": 0.0145,
    "additional_medicare": 0.009,
    "social_security_wage_cap": 168600.0,
    "additional_medicare_threshold": 200000.0,
}

STATE_TAX_DATA = {
    "Alabama": {"rate": 0.05, "has_local_tax": True, "scheme": "city"},
    "Alaska": {"rate": 0.0},
    "Arizona": {"rate": 0.025},
    "Arkansas": {"rate": 0.039},
    "California": {"rate": 0.133},
    "Colorado": {"rate": 0.044, "has_local_tax": True, "scheme": "city"},
    "Connecticut": {"rate": 0.0699},
    "Delaware": {"rate": 0.066, "has_local_tax": True, "scheme": "city"},
    "Florida": {"rate": 0.0},
    "Georgia": {"rate": 0.0539},
    "Hawaii": {"rate": 0.11},
    "Idaho": {"rate": 0.05965},
    "Illinois": {"rate": 0.049},
    "Indiana": {"rate": 0.03, "has_local_tax": True, "scheme": "county"},
    "Iowa": {"rate": 0.038, "has_local_tax": True, "scheme": "school_district"},
    "Kansas": {"rate": 0.0558},
    "Kentucky": {"rate": 0.04, "has_local_tax": True, "scheme": "city"},
    "Louisiana": {"rate": 0.03},
    "Maine": {"rate": 0.0715},
    "Maryland": {"rate": 0.0575, "has_local_tax": True, "scheme": "county"},
    "Massachusetts": {"rate": 0.09},
    "Michigan": {"rate": 0.0425, "has_local_tax": True, "scheme": "city"},
    "Minnesota": {"rate": 0.0985},
    "Mississippi": {"rate": 0.044},
    "Missouri": {"rate": 0.047, "has_local_tax": True, "scheme": "city"},
    "Montana": {"rate": 0.059},
    "Nebraska": {"rate": 0.052},
    "Nevada": {"rate": 0.0},
    "New Hampshire": {"rate": 0.0},
    "New Jersey": {"rate": 0.1075, "has_local_tax": True, "scheme": "city"},
    "New Mexico": {"rate": 0.059},
    "New York": {"rate": 0.109, "has_local_tax": True, "scheme": "city", "progressive": True},
    "North Carolina": {"rate": 0.0425},
    "North Dakota": {"rate": 0.025},
    "Ohio": {"rate": 0.035, "has_local_tax": True, "scheme": "city"},
    "Oklahoma": {"rate": 0.0475},
    "Oregon": {"rate": 0.099, "has_local_tax": True, "scheme": "table_based"},
    "Pennsylvania": {"rate": 0.0307, "has_local_tax": True, "scheme": "both"},
    "Rhode Island": {"rate": 0.0599},
    "South Carolina": {"rate": 0.062},
    "South Dakota": {"rate": 0.0},
    "Tennessee": {"rate": 0.0},
    "Texas": {"rate": 0.0},
    "Utah": {"rate": 0.0455},
    "Vermont": {"rate": 0.0875},
    "Virginia": {"rate": 0.0575},
    "Washington": {"rate": 0.07},
    "West Virginia": {"rate": 0.0482, "has_local_tax": True, "scheme": "city"},
    "Wisconsin": {"rate": 0.0765},
    "Wyoming": {"rate": 0.0},
}

# Tax = base + rate * (income - min) within the bracket holding income.
NEW_YORK_BRACKETS = [
    {"min": 0, "max": 8500, "rate": 0.04, "base": 0},
    {"min": 8500, "max": 11700, "rate": 0.045, "base": 340},
    {"min": 11700, "max": 13900, "rate": 0.0525, "base": 484},
    {"min": 13900, "max": 80650, "rate": 0.055, "base": 600},
    {"min": 80650, "max": 215400, "rate": 0.06, "base": 4271},
    {"min": 215400, "max": 1077550, "rate": 0.0685, "base": 12356},
    {"min": 1077550, "max": 5000000, "rate": 0.0965, "base": 71413},
    {"min": 5000000, "max": 25000000, "rate": 0.103, "base": 449929},
    {"min": 25000000, "max": None, "rate": 0.109, "base": 2509929},
]

INDIANA_COUNTIES = {
    "Allen": {"type": "percentage", "value": 0.0159},
    "Elkhart": {"type": "percentage", "value": 0.02},
    "Hamilton": {"type": "percentage", "value": 0.011},
    "Lake": {"type": "percentage", "value": 0.015},
    "Marion": {"type": "percentage", "value": 0.0202},
    "Monroe": {"type": "percentage", "value": 0.01345},
    "St. Joseph": {"type": "percentage", "value": 0.0175},
    "Tippecanoe": {"type": "percentage", "value": 0.0128},
    "Vanderburgh": {"type": "percentage", "value": 0.0125},
}

MARYLAND_COUNTIES = {
    "Anne Arundel": {"type": "range", "min": 0.027, "max": 0.0281},
    "Baltimore City": {"type": "percentage", "value": 0.032},
    "Baltimore County": {"type": "percentage", "value": 0.032},
    "Frederick": {"type": "range", "min": 0.0225, "max": 0.0296},
    "Harford": {"type": "percentage", "value": 0.0306},
    "Howard": {"type": "percentage", "value": 0.032},
    "Montgomery": {"type": "percentage", "value": 0.032},
    "Prince George's": {"type": "percentage", "value": 0.032},
    "Talbot": {"type": "percentage", "value": 0.024},
    "Worcester": {"type": "percentage", "value": 0.0225},
}

MICHIGAN_CITIES = {
    "default": {"type": "percentage", "value": 0.01},
    "exceptions": {
        "Detroit": {"type": "percentage", "value": 0.024},
        "Grand Rapids": {"type": "percentage", "value": 0.015},
        "Highland Park": {"type": "percentage", "value": 0.02},
        "Saginaw": {"type": "percentage", "value": 0.015},
    },
}

MISSOURI_CITIES = {
    "Kansas City": {"type": "percentage", "value": 0.01},
    "St. Louis": {"type": "percentage", "value": 0.01},
}

NEW_JERSEY_CITIES = {
    "Jersey City": {"type": "percentage", "value": 0.01},
    "Newark": {"type": "percentage", "value": 0.01},
}

NEW_YORK_CITIES = {
    "New York City": {"type": "percentage", "value": 0.0397},
    "Yonkers": {"type": "percentage", "value": 0.015},
}

OHIO_MUNICIPALITIES = {
    "Akron": {"type": "percentage", "value": 0.025},
    "Canton": {"type": "percentage", "value": 0.025},
    "Cincinnati": {"type": "percentage", "value": 0.018},
    "Cleveland": {"type": "percentage", "value": 0.025},
    "Columbus": {"type": "percentage", "value": 0.025},
    "Dayton": {"type": "percentage", "value": 0.025},
    "Toledo": {"type": "percentage", "value": 0.025},
    "Youngstown": {"type": "percentage", "value": 0.0275},
}

OREGON_LOCAL = {"type": "percentage", "value": 0.058}

PENNSYLVANIA_CITIES = {
    "Allentown": {"type": "fixed", "value": 0.0197},
    "Philadelphia": {"type": "fixed", "value": 0.0375},
    "Pittsburgh": {"type": "fixed", "value": 0.03},
    "Reading": {"type": "fixed", "value": 0.036},
    "Scranton": {"type": "fixed", "value": 0.034},
}

PENNSYLVANIA_COUNTIES = {
    "Allegheny": {"type": "range", "min": 0.01, "max": 0.03},
    "Bucks": {"type": "range", "min": 0.005, "max": 0.01},
    "Chester": {"type": "range", "min": 0.01, "max": 0.015},
    "Dauphin": {"type": "range", "min": 0.01, "max": 0.02},
    "Delaware": {"type": "range", "min": 0.01, "max": 0.02},
    "Erie": {"type": "fixed", "value": 0.0118},
    "Lancaster": {"type": "fixed", "value": 0.011},
    "Montgomery": {"type": "range", "min": 0.01, "max": 0.015},
}

WEST_VIRGINIA_CITIES = {
    "Charleston": {"type": "per_period", "amount": 4},
    "Huntington": {"type": "per_period", "amount": 6},
    "Parkersburg": {"type": "per_period", "amount": 5},
}

# state -> {"cities": ..., "counties": ..., "default": ..., "statewide": ...}
LOCAL_TAX_DATA = {
    "Indiana": {"counties": INDIANA_COUNTIES},
    "Maryland": {"counties": MARYLAND_COUNTIES},
    "Michigan": {"cities": MICHIGAN_CITIES["exceptions"], "default": MICHIGAN_CITIES["default"]},
    "Missouri": {"cities": MISSOURI_CITIES},
    "New Jersey": {"cities": NEW_JERSEY_CITIES},
    "New York": {"cities": NEW_YORK_CITIES},
    "Ohio": {"cities": OHIO_MUNICIPALITIES},
    "Oregon": {"statewide": OREGON_LOCAL},
    "Pennsylvania": {"cities": PENNSYLVANIA_CITIES, "counties": PENNSYLVANIA_COUNTIES},
    "West Virginia": {"cities": WEST_VIRGINIA_CITIES},
}

# Effective annual rate as a fraction of assessed value.
PROPERTY_TAX_RATES = {
    "Arizona": {"Maricopa": 0.0059, "Pima": 0.0077, "Pinal": 0.0071},
    "California": {
        "Alameda": 0.0078,
        "Los Angeles": 0.0072,
        "Orange": 0.0069,
        "Sacramento": 0.0081,
        "San Diego": 0.0073,
        "San Francisco": 0.0066,
        "Santa Clara": 0.0072,
    },
    "Colorado": {"Arapahoe": 0.0055, "Denver": 0.0052, "El Paso": 0.0047, "Jefferson": 0.0056},
    "Florida": {
        "Broward": 0.0112,
        "Duval": 0.0099,
        "Hillsborough": 0.0101,
        "Miami-Dade": 0.0102,
        "Orange": 0.0094,
        "Palm Beach": 0.0109,
    },
    "Georgia": {"Cobb": 0.0089, "DeKalb": 0.0121, "Fulton": 0.0104, "Gwinnett": 0.0114},
    "Illinois": {"Cook": 0.0183, "DuPage": 0.0174, "Lake": 0.0249, "Will": 0.0227},
    "Indiana": {"Allen": 0.0093, "Hamilton": 0.0089, "Lake": 0.0129, "Marion": 0.0103},
    "Iowa": {"Linn": 0.0154, "Polk": 0.0169, "Scott": 0.0163},
    "Maryland": {
        "Anne Arundel": 0.009,
        "Baltimore City": 0.0198,
        "Baltimore County": 0.0114,
        "Howard": 0.0121,
        "Montgomery": 0.0096,
        "Prince George's": 0.0133,
    },
    "Massachusetts": {"Middlesex": 0.0109, "Norfolk": 0.0117, "Suffolk": 0.0074, "Worcester": 0.0137},
    "Michigan": {"Kent": 0.0119, "Macomb": 0.0163, "Oakland": 0.0147, "Washtenaw": 0.0176, "Wayne": 0.0201},
    "Missouri": {"Greene": 0.0091, "Jackson": 0.0137, "St. Louis City": 0.0115, "St. Louis County": 0.0134},
    "New Jersey": {"Bergen": 0.0198, "Essex": 0.0222, "Hudson": 0.0162, "Middlesex": 0.0216, "Monmouth": 0.0175},
    "New York": {
        "Erie": 0.0228,
        "Kings": 0.0062,
        "Monroe": 0.0267,
        "Nassau": 0.0178,
        "New York": 0.0089,
        "Queens": 0.0081,
        "Suffolk": 0.0177,
        "Westchester": 0.0162,
    },
    "North Carolina": {"Guilford": 0.0104, "Mecklenburg": 0.0094, "Wake": 0.0084},
    "Ohio": {
        "Cuyahoga": 0.0244,
        "Franklin": 0.0162,
        "Hamilton": 0.0191,
        "Lucas": 0.0207,
        "Montgomery": 0.0197,
        "Summit": 0.0187,
    },
    "Oregon": {"Lane": 0.0098, "Marion": 0.0101, "Multnomah": 0.0112, "Washington": 0.0099},
    "Pennsylvania": {
        "Allegheny": 0.0194,
        "Bucks": 0.0139,
        "Chester": 0.0155,
        "Delaware": 0.0203,
        "Montgomery": 0.0144,
        "Philadelphia": 0.0099,
    },
    "Texas": {
        "Bexar": 0.0209,
        "Collin": 0.0183,
        "Dallas": 0.0193,
        "Harris": 0.0203,
        "Tarrant": 0.0198,
        "Travis": 0.0166,
    },
    "Virginia": {"Arlington": 0.0087, "Fairfax": 0.0101, "Virginia Beach": 0.0085},
    "Washington": {"King": 0.0093, "Pierce": 0.0112, "Snohomish": 0.0093, "Spokane": 0.0111},
    "West Virginia": {"Cabell": 0.0064, "Kanawha": 0.0063, "Wood": 0.0056},
}
