from decimal import Decimal

from werkzeug.security import generate_password_hash

from app import create_app
from models import Food, FoodPortionSize, User, db

COOLER_PAN = {"Large Cooler": "150.00", "Small Cooler": "90.00", "Full Pan": "80.00", "Half Pan": "40.00"}
SWALLOW = {"Party Size": "2.00", "Regular Size": "4.00"}

CATALOG = {
    "Rice": [
        ("Jollof Rice", "Spicy traditional rice", "/food/jollof-rice.jpeg", COOLER_PAN),
        ("Fried Rice (Vegetable)", "Nigerian vegetable fried rice with peas and carrots", "/food/fried-rice.png", COOLER_PAN),
        ("Fried Rice (Shrimp)", "Nigerian shrimp fried rice with peas and carrots", "/food/fried-rice-shrimp.jpeg",
         {"Large Cooler": "200.00", "Small Cooler": "125.00", "Full Pan": "90.00", "Half Pan": "50.00"}),
        ("White Rice", "Parboiled", "/food/white-rice.jpeg", COOLER_PAN),
    ],
    "Fufu": [
        ("Pounded Yam", "Traditional Nigerian pounded yam, smooth and stretchy", "/food/fufu.jpeg", SWALLOW),
        ("Eba", "Garri (cassava flakes) prepared with hot water", "/food/eba.png", SWALLOW),
        ("Amala", "Yam flour fufu, dark and smooth", "/food/amala.png", SWALLOW),
    ],
}


def seed_catalog():
    for category, foods in CATALOG.items():
        for position, (name, description, image, sizes) in enumerate(foods):
            food = Food(name=name, description=description, image=image, category=category, sort_order=position)
            food.portion_sizes = [
                FoodPortionSize(size_name=size, price=Decimal(price), sort_order=i)
                for i, (size, price) in enumerate(sizes.items())
            ]
            db.session.add(food)


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        if not User.query.filter_by(username="admin").first():
            admin = User(username="admin", password_hash=generate_password_hash("password"), role="admin")
            db.session.add(admin)

        if Food.query.count() == 0:
            seed_catalog()

        db.session.commit()
        print("Seeded. Username=admin, Password=password")
