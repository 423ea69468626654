"""Built-in Daily N'Oats product catalog."""

PRODUCT_RECORDS: list[dict[str, object]] = [
    {
        "id": "weight-loss-bundle",
        "name": "30-DAY RESET BUNDLE",
        "price": 89.99,
        "netCarbs": 5,
        "protein": 15,
        "fiber": 10,
        "flavor": "assorted",
        "dietary": ["keto", "gluten-free", "sugar-free", "high-protein"],
        "allergens": ["tree nuts"],
    },
    {
        "id": "30-day-glp-bundle",
        "name": "THE DAILY N'OATS GLP-1 BUNDLE",
        "price": 99.99,
        "netCarbs": 5,
        "protein": 16,
        "fiber": 11,
        "flavor": "assorted",
        "dietary": ["keto", "gluten-free", "sugar-free", "high-protein"],
        "allergens": ["tree nuts"],
    },
    {
        "id": "variety-bundle",
        "name": "Daily N'Oats Variety Bundle",
        "price": 54.99,
        "netCarbs": 5,
        "protein": 15,
        "fiber": 10,
        "flavor": "variety",
        "dietary": ["keto", "gluten-free", "sugar-free"],
        "allergens": ["tree nuts", "coconut"],
    },
    {
        "id": "daily-noats-6-pack",
        "name": "Daily N'Oats 6-Pack",
        "price": 29.99,
        "netCarbs": 5,
        "protein": 15,
        "fiber": 10,
        "flavor": "variety",
        "dietary": ["keto", "gluten-free", "sugar-free"],
        "allergens": ["tree nuts"],
    },
    {
        "id": "naked-noats",
        "name": "Naked N'Oats",
        "price": 12.99,
        "netCarbs": 4,
        "protein": 14,
        "fiber": 10,
        "flavor": "unflavored",
        "dietary": ["keto", "vegan", "gluten-free", "sugar-free", "dairy-free"],
        "allergens": [],
    },
    {
        "id": "chocolate-noats",
        "name": "Chocolate N'Oats",
        "price": 12.99,
        "netCarbs": 6,
        "protein": 15,
        "fiber": 11,
        "flavor": "chocolate",
        "dietary": ["keto", "vegan", "gluten-free", "sugar-free", "dairy-free"],
        "allergens": [],
    },
    {
        "id": "maple-pecan-noats",
        "name": "Maple Pecan N'Oats",
        "price": 12.99,
        "netCarbs": 5,
        "protein": 14,
        "fiber": 10,
        "flavor": "maple pecan",
        "dietary": ["keto", "gluten-free", "sugar-free"],
        "allergens": ["tree nuts"],
    },
    {
        "id": "blueberry-muffin-noats",
        "name": "Blueberry Muffin N'Oats",
        "price": 12.99,
        "netCarbs": 6,
        "protein": 14,
        "fiber": 10,
        "flavor": "blueberry",
        "dietary": ["keto", "vegan", "gluten-free", "sugar-free", "dairy-free"],
        "allergens": [],
    },
    {
        "id": "peanut-butter-noats",
        "name": "Peanut Butter N'Oats",
        "price": 12.99,
        "netCarbs": 5,
        "protein": 17,
        "fiber": 10,
        "flavor": "peanut butter",
        "dietary": ["keto", "gluten-free", "sugar-free", "high-protein"],
        "allergens": ["peanuts"],
    },
]
