"""Default category tree seeded for a new user."""

from finance_tracker.models.records import Category, Subcategory, TransactionType


_DEFAULT_TREE = (
    ("1", "Salary", TransactionType.INCOME, "#4CAF50", "Briefcase",
     ("Main Salary", "Bonus", "Overtime")),
    ("2", "Investments", TransactionType.INCOME, "#2196F3", "TrendingUp",
     ("Dividends", "Interest", "Rent Received")),
    ("3", "Other Income", TransactionType.INCOME, "#9C27B0", "Gift",
     ("Gifts", "Refunds", "Sales")),
    ("4", "Housing", TransactionType.EXPENSE, "#F44336", "Home",
     ("Rent", "Condo Fee", "Electricity", "Water", "Internet", "Gas", "Maintenance")),
    ("5", "Food", TransactionType.EXPENSE, "#FF9800", "ShoppingCart",
     ("Groceries", "Restaurants", "Delivery")),
    ("6", "Transport", TransactionType.EXPENSE, "#3F51B5", "Car",
     ("Fuel", "Public Transport", "Ride Sharing", "Parking", "Car Maintenance")),
    ("7", "Health", TransactionType.EXPENSE, "#E91E63", "Heart",
     ("Health Insurance", "Pharmacy", "Appointments")),
    ("8", "Education", TransactionType.EXPENSE, "#009688", "BookOpen",
     ("Tuition", "Courses", "Books")),
    ("9", "Leisure", TransactionType.EXPENSE, "#673AB7", "Film",
     ("Streaming", "Travel", "Events")),
)


def default_categories() -> list[Category]:
    """
    Build the standard category tree.

    Subcategory ids are the category id followed by a two-digit index
    (category "4" -> "401", "402", ...).
    """
    categories = []
    for category_id, name, type_, color, icon, sub_names in _DEFAULT_TREE:
        subcategories = tuple(
            Subcategory(
                id=f"{category_id}{index:02d}",
                name=sub_name,
                category_id=category_id,
            )
            for index, sub_name in enumerate(sub_names, start=1)
        )
        categories.append(Category(
            id=category_id,
            name=name,
            type=type_,
            color=color,
            icon=icon,
            subcategories=subcategories,
        ))
    return categories
