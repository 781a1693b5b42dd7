import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1].parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def raw_taxonomy():
    return {
        "services": [
            {
                "category": "Embroidery",
                "subServices": [
                    {"id": "hand_embroidery", "name": "Hand Embroidery"},
                    {"id": "machine_embroidery", "name": "Machine Embroidery"},
                ],
            },
            {
                "category": "Home Cooked Food",
                "subServices": [
                    {"id": "south_indian_meals", "name": "South Indian Meals"},
                    {"id": "quick_snacks", "name": "Evening Snacks"},
                ],
            },
            {
                "title": "Festive Crafts",
                "subServices": [
                    {"id": "ganapati_festival_kit", "name": "Ganapati Festival Kit"},
                    {"id": "festive_craft_delight", "name": "Festive Craft Delight"},
                ],
            },
        ]
    }


@pytest.fixture
def raw_providers():
    return [
        {"id": "food_0", "name": "Ananya Patel", "serviceId": "south_indian_meals", "location": "Chennai"},
        {"id": "hand_0", "name": "Priya Sharma", "serviceId": "hand_embroidery", "rating": "4.5"},
        {"id": "machine_0", "name": "Kavya Nair", "serviceId": "Machine-Embroidery"},
        {"id": "food_1", "name": "Sunita Verma", "serviceId": "quick snacks"},
        {"id": "fest_0", "name": "Lakshmi Iyer", "serviceId": "ganapati_festival_kit"},
        {"id": "pottery_0", "name": "Meera Joshi", "serviceId": "pottery_classes"},
    ]


@pytest.fixture
def raw_products():
    return [
        {"id": "prod_hand_0", "name": "Custom Embroidery Design", "serviceId": "hand_embroidery", "price": 1500},
        {"id": "prod_hand_1", "name": "Cushion Cover", "serviceId": "Hand Embroidery", "basePrice": 650},
        {"id": "prod_food_0", "name": "Traditional Meal Package", "serviceId": "south_indian_meals", "price": 350},
        {
            "id": "prod_fest_1",
            "name": "Torans and Rangoli Set",
            "serviceId": "festive_craft_delight",
            "category": "Festive Crafts",
            "providerId": "fest_0",
            "price": 750,
        },
        {"id": "prod_misc", "name": "Clay Diya Set", "providerId": "pottery_0", "price": 250},
    ]


@pytest.fixture
def snapshot(raw_providers, raw_products, raw_taxonomy):
    from provider_resolver.catalog.snapshot import load_reference_data

    return load_reference_data(raw_providers, raw_products, raw_taxonomy)
