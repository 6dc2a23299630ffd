"""Sample catalog and default admin account inserted on first start."""

import logging

from pymongo.errors import PyMongoError

from database import PRODUCTS, USERS, Database
from schemas import Account, Category, Product, Role

logger = logging.getLogger("storefront.seed")

_IMG = "https://placehold.co/100x100/{}"

SAMPLE_PRODUCTS = [
    # --- Groceries ---
    {"name": "Organic Bananas", "category": Category.GROCERIES.label, "price": 0.79, "image_url": _IMG.format("F5C913/000?text=Banana")},
    {"name": "Premium Espresso Beans", "category": Category.GROCERIES.label, "price": 12.99, "image_url": _IMG.format("6A4D3A/FFF?text=Coffee")},
    {"name": "Whole Wheat Bread", "category": Category.GROCERIES.label, "price": 3.75, "image_url": _IMG.format("6d4c41/ffffff?text=Bread")},
    {"name": "Dozen Large Eggs", "category": Category.GROCERIES.label, "price": 4.99, "image_url": _IMG.format("ffd54f/333333?text=Eggs")},
    {"name": "Frozen Chicken Breasts", "category": Category.GROCERIES.label, "price": 18.99, "image_url": _IMG.format("78909c/ffffff?text=Chicken")},

    # --- Kitchen utensils ---
    {"name": "Stainless Steel Whisk", "category": Category.KITCHEN_UTENSILS.label, "price": 8.50, "image_url": _IMG.format("A0A0A0/FFF?text=Whisk")},
    {"name": "Non-stick Frying Pan", "category": Category.KITCHEN_UTENSILS.label, "price": 25.00, "image_url": _IMG.format("E5E5E5/000?text=Pan")},
    {"name": "Bamboo Cutting Board", "category": Category.KITCHEN_UTENSILS.label, "price": 14.99, "image_url": _IMG.format("28a745/ffffff?text=Cutting+Board")},
    {"name": "Digital Kitchen Scale", "category": Category.KITCHEN_UTENSILS.label, "price": 25.00, "image_url": _IMG.format("6c757d/ffffff?text=Scale")},
    {"name": "Silicone Spatula Set", "category": Category.KITCHEN_UTENSILS.label, "price": 11.99, "image_url": _IMG.format("fd7e14/ffffff?text=Spatula+Set")},

    # --- Snacks ---
    {"name": "Salted Potato Chips (Pack)", "category": Category.SNACKS.label, "price": 3.50, "image_url": _IMG.format("F0E68C/000?text=Chips")},
    {"name": "Sparkling Water (6-Pack)", "category": Category.SNACKS.label, "price": 5.99, "image_url": _IMG.format("ADD8E6/000?text=Water")},
    {"name": "Chocolate Bar (King Size)", "category": Category.SNACKS.label, "price": 1.75, "image_url": _IMG.format("795548/FFF?text=Choc")},
    {"name": "Protein Bar (Single)", "category": Category.SNACKS.label, "price": 3.50, "image_url": _IMG.format("CDDC39/000?text=Protein")},
    {"name": "Gourmet Popcorn (Bag)", "category": Category.SNACKS.label, "price": 3.99, "image_url": _IMG.format("FF5722/FFF?text=Popcorn")},

    # --- Stationery ---
    {"name": "Gel Pens (Set of 10)", "category": Category.STATIONERY.label, "price": 6.00, "image_url": _IMG.format("4682B4/FFF?text=Pens")},
    {"name": "A4 Notebook (Lined)", "category": Category.STATIONERY.label, "price": 4.50, "image_url": _IMG.format("D3D3D3/000?text=Notebook")},
    {"name": "Highlighter Set (4)", "category": Category.STATIONERY.label, "price": 7.50, "image_url": _IMG.format("FFC107/000?text=H+Light")},
    {"name": "Scientific Calculator", "category": Category.STATIONERY.label, "price": 15.00, "image_url": _IMG.format("343a40/FFF?text=Calc")},
    {"name": "Heavy Duty Stapler", "category": Category.STATIONERY.label, "price": 12.00, "image_url": _IMG.format("808080/FFF?text=Stapler")},

    # --- Electronics ---
    {"name": "Smartphone Pro X", "category": Category.ELECTRONICS.label, "price": 899.00, "image_url": _IMG.format("000000/FFF?text=Phone")},
    {"name": "4K Smart LED TV", "category": Category.ELECTRONICS.label, "price": 1200.00, "image_url": _IMG.format("800080/FFF?text=TV")},
    {"name": "Noise-Cancelling Headphones", "category": Category.ELECTRONICS.label, "price": 199.99, "image_url": _IMG.format("17A2B8/FFF?text=HP")},
    {"name": "Ultra-Slim Laptop", "category": Category.ELECTRONICS.label, "price": 1500.00, "image_url": _IMG.format("212529/FFF?text=Laptop")},
    {"name": "Smart Home Speaker", "category": Category.ELECTRONICS.label, "price": 79.99, "image_url": _IMG.format("6610F2/FFF?text=Speaker")},

    # --- Home appliances ---
    {"name": "Energy-Efficient Washer", "category": Category.APPLIANCES.label, "price": 750.00, "image_url": _IMG.format("FFD700/000?text=Washer")},
    {"name": "Robotic Vacuum Cleaner", "category": Category.APPLIANCES.label, "price": 350.00, "image_url": _IMG.format("FF6347/FFF?text=Vacuum")},
    {"name": "Digital Microwave Oven", "category": Category.APPLIANCES.label, "price": 150.00, "image_url": _IMG.format("B0C4DE/000?text=Microwave")},
    {"name": "High-Speed Blender", "category": Category.APPLIANCES.label, "price": 99.99, "image_url": _IMG.format("DC3545/FFF?text=Blender")},
    {"name": "Programmable Coffee Maker", "category": Category.APPLIANCES.label, "price": 65.00, "image_url": _IMG.format("98FB98/000?text=Coffee+Maker")},

    # --- Fashion dresses ---
    {"name": "Summer Floral Dress", "category": Category.FASHION.label, "price": 45.00, "image_url": _IMG.format("FFC0CB/000?text=Dress")},
    {"name": "Slim Fit Blazer", "category": Category.FASHION.label, "price": 85.00, "image_url": _IMG.format("4682B4/FFF?text=Blazer")},
    {"name": "Casual T-shirt (3-Pack)", "category": Category.FASHION.label, "price": 30.00, "image_url": _IMG.format("F0F8FF/000?text=Tshirt")},
    {"name": "Denim Jeans (Slim Fit)", "category": Category.FASHION.label, "price": 55.00, "image_url": _IMG.format("4169E1/FFF?text=Jeans")},
    {"name": "Leather Belt", "category": Category.FASHION.label, "price": 25.00, "image_url": _IMG.format("8B4513/FFF?text=Belt"), "description": "Genuine leather belt."},
]

DEFAULT_ADMIN = {
    "email": "admin@ecommercestore.com",
    "password": "admim",
    "name": "Site Administrator",
    "role": Role.ADMIN,
}


def seed_sample_data(database: Database) -> None:
    """Insert the sample catalog and default admin when they are missing.

    Existing data is never touched. Failures are logged and swallowed so a
    partially seeded store still serves requests.
    """
    try:
        if database.collection(PRODUCTS).count_documents({}) == 0:
            docs = [Product(**p).model_dump() for p in SAMPLE_PRODUCTS]
            database.collection(PRODUCTS).insert_many(docs)
            logger.info("Sample product data seeded (%d products)", len(docs))
        else:
            logger.debug("Products already exist, skipping catalog seed")

        if database.collection(USERS).count_documents({"role": Role.ADMIN.value}) == 0:
            admin = Account(**DEFAULT_ADMIN).model_dump(mode="json")
            database.collection(USERS).insert_one(admin)
            logger.info("Default admin user seeded: %s", admin["email"])
    except PyMongoError as e:
        logger.error("Error seeding data: %s", e, exc_info=True)
