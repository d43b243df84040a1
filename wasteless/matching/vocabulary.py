"""Curated word lists used by the ingredient normalizer and matcher.

All entries are lower-case and already normalized (no punctuation).
"""

# Staples assumed to be in every kitchen. Keep this minimal: anything listed here
# matches every recipe line that names it, so common foods do not belong here.
COMMON_INGREDIENTS: frozenset[str] = frozenset({
    "water", "cold water", "warm water", "hot water", "boiling water", "tap water",
    "ice", "ice cubes", "crushed ice",
})

# Descriptive words that never decide what the ingredient is
STOP_WORDS: frozenset[str] = frozenset({
    "fresh", "organic", "free-range", "natural", "raw", "cooked", "frozen",
    "canned", "dried", "whole", "sliced", "diced", "chopped", "minced",
    "large", "small", "medium", "extra", "premium", "grade", "quality",
    "lean", "fat-free", "low-fat", "reduced", "sodium", "unsalted",
    "white", "red", "green", "yellow", "brown", "black", "blue", "purple",
    "soft", "hard", "light", "dark", "sweet", "sour", "hot", "mild",
    "flavoured", "flavored", "scented", "mixed", "blended", "instant",
    "powdered", "ground", "crushed", "fine", "coarse", "pure",
})

# High-value words that carry the identity of an ingredient; counted double
CORE_INGREDIENT_WORDS: frozenset[str] = frozenset({
    "chicken", "beef", "pork", "fish", "milk", "cheese", "bread", "rice",
    "pasta", "tomato", "onion", "potato", "carrot", "apple", "banana",
    "flour", "egg", "lime", "lemon", "orange", "garlic", "ginger",
})

# base phrase -> phrases that name the same purchasable item
SYNONYMS: dict[str, tuple[str, ...]] = {
    # Proteins
    "chicken": ("chicken breast", "chicken thigh", "chicken leg", "poultry", "chicken meat", "chicken fillet"),
    "beef": ("ground beef", "beef steak", "steak", "ground meat", "beef chuck", "beef roast", "beef mince"),
    "pork": ("pork chop", "pork tenderloin", "pork shoulder", "bacon", "ham"),
    "fish": ("salmon", "tuna", "cod", "tilapia", "seafood", "white fish"),
    "egg": ("eggs", "egg yolk", "egg white", "large egg"),
    # Dairy
    "milk": ("whole milk", "skim milk", "2% milk", "dairy milk", "cow milk", "fresh milk"),
    "cheese": ("cheddar cheese", "mozzarella cheese", "parmesan cheese", "swiss cheese"),
    "yogurt": ("greek yogurt", "plain yogurt", "natural yogurt"),
    "butter": ("unsalted butter", "salted butter", "dairy butter"),
    "cream": ("heavy cream", "whipping cream", "double cream", "cooking cream"),
    # Oils
    "olive oil": ("extra virgin olive oil", "virgin olive oil", "light olive oil"),
    "vegetable oil": ("canola oil", "sunflower oil", "corn oil", "soybean oil"),
    "coconut oil": ("virgin coconut oil", "refined coconut oil"),
    # Vegetables
    "tomato": ("tomatoes", "fresh tomatoes", "roma tomato", "cherry tomato"),
    "onion": ("onions", "yellow onion", "white onion", "red onion", "sweet onion"),
    "potato": ("potatoes", "red potato", "russet potato"),
    "carrot": ("carrots", "baby carrot"),
    "pepper": ("bell pepper", "red pepper", "green pepper", "yellow pepper"),
    # Fruits
    "apple": ("apples", "green apple", "red apple"),
    "banana": ("bananas", "ripe banana"),
    "orange": ("oranges", "navel orange"),
    "lemon": ("lemons", "fresh lemon"),
    "lime": ("limes", "fresh lime"),
    # Grains
    "rice": ("white rice", "brown rice", "jasmine rice", "basmati rice"),
    "pasta": ("spaghetti", "penne", "linguine", "macaroni"),
    "bread": ("white bread", "wheat bread", "whole grain bread"),
    "flour": ("all purpose flour", "wheat flour", "bread flour", "plain flour"),
    # Seasonings
    "black pepper": ("pepper", "ground black pepper"),
    "garlic": ("fresh garlic", "garlic cloves"),
    "ginger": ("fresh ginger", "ginger root"),
}

# The most specific item owning a name's tokens decides; ties keep category order
FOOD_CATEGORIES: dict[str, tuple[str, ...]] = {
    "proteins": (
        "chicken", "beef", "pork", "fish", "turkey", "lamb", "egg", "tofu",
        "meat", "salmon", "tuna", "cod", "shrimp", "bacon", "ham",
    ),
    "dairy": (
        "milk", "cheese", "yogurt", "cream", "sour cream", "butter",
        "cottage cheese", "mozzarella", "cheddar", "parmesan",
    ),
    "vegetables": (
        "tomato", "onion", "carrot", "potato", "pepper", "lettuce", "spinach",
        "broccoli", "cauliflower", "celery", "garlic", "ginger", "mushroom",
    ),
    "fruits": (
        "apple", "banana", "orange", "grape", "berry", "lemon", "lime",
        "strawberry", "blueberry", "raspberry", "peach", "pear",
    ),
    "grains": (
        "bread", "rice", "pasta", "flour", "oat", "wheat", "quinoa",
        "barley", "cereal", "noodle", "spaghetti", "macaroni",
    ),
    "condiments_seasonings": (
        "vinegar", "sauce", "ketchup", "mustard", "mayo", "dressing",
        "seasoning", "spice", "herb", "salt", "pepper", "black pepper",
    ),
    "oils_fats": (
        "oil", "butter", "margarine", "lard", "shortening",
    ),
    "processed_foods": (
        "cookies", "crackers", "chips", "snacks", "cereal", "granola", "cake", "muffin",
    ),
}

# Unordered category pairs allowed to partially match each other
COMPATIBLE_CATEGORY_PAIRS: frozenset[frozenset[str]] = frozenset({
    frozenset({"dairy", "proteins"}),
    frozenset({"condiments_seasonings", "vegetables"}),
    frozenset({"condiments_seasonings", "proteins"}),
})

# Plain ingredients that must not match a product built around them
BASE_INGREDIENTS: frozenset[str] = frozenset({
    "butter", "chocolate", "vanilla", "strawberry", "lemon", "orange",
    "coconut", "peanut", "almond", "walnut", "honey", "maple",
    "cinnamon", "ginger", "mint", "coffee", "tea", "corn", "flour",
    "cheese", "cream", "milk", "oil", "salt", "pepper", "sugar",
})

# Words that turn a base ingredient into a different product
COMPOUND_INDICATORS: frozenset[str] = frozenset({
    "cookies", "cookie", "cake", "muffin", "pie", "tart", "bread", "loaf",
    "chips", "chip", "crackers", "cracker", "snacks", "cereal", "granola", "bar", "balls",
    "candies", "candy", "gum", "chocolate", "ice", "cream", "frozen",
    "flavored", "flavoured", "scented", "infused", "marinated", "glazed",
    "coated", "stuffed", "filled", "topped", "covered", "wrapped",
    "schnitzel", "burger", "pizza", "pasta", "noodles", "sauce", "soup",
    "stew", "casserole", "salad", "sandwich", "wrap", "roll",
})

# base -> words that make a different product when paired with it
AVOID_PAIRS: dict[str, frozenset[str]] = {
    "butter": frozenset({"flavored", "flavoured", "scented", "infused", "cookies", "cake", "bread", "onion", "onions"}),
    "chocolate": frozenset({"chip", "chips", "cookies", "cake", "milk", "ice", "bar"}),
    "vanilla": frozenset({"flavored", "flavoured", "ice", "cream", "cookies", "cake"}),
    "corn": frozenset({"schnitzel", "chips", "flakes", "syrup", "starch", "meal"}),
    "flour": frozenset({"tortilla", "bread", "cake", "cookies", "pasta"}),
    "cheese": frozenset({"crackers", "cracker", "chips", "sauce", "soup", "cake"}),
    "cream": frozenset({"ice", "soup", "sauce", "cookies", "cheese"}),
    "milk": frozenset({"chocolate", "powder", "shake", "ice", "cake"}),
    "oil": frozenset({"spray", "chips", "fried", "cooked"}),
    "sugar": frozenset({"cookies", "cake", "candy", "syrup", "caramel"}),
    "lemon": frozenset({"cake", "cookies", "pie", "candy", "drops"}),
    "orange": frozenset({"juice", "cake", "cookies", "candy", "peel"}),
}

# Sweet peppers are vegetables, the rest are the spice
PEPPER_WORDS: frozenset[str] = frozenset({"pepper", "peppers"})
SWEET_PEPPER_WORDS: frozenset[str] = frozenset({"bell", "red", "green", "yellow", "orange", "sweet"})
SPICE_PEPPER_WORDS: frozenset[str] = frozenset({"black", "white", "ground", "cracked"})

OIL_TYPES: tuple[str, ...] = (
    "olive", "canola", "rapeseed", "coconut", "sunflower", "corn", "sesame", "soybean", "vegetable",
)

# Oil sub-types that name the same bottle
OIL_EQUIVALENTS: frozenset[frozenset[str]] = frozenset({
    frozenset({"canola", "rapeseed"}),
    frozenset({"vegetable", "canola"}),
    frozenset({"vegetable", "rapeseed"}),
    frozenset({"vegetable", "sunflower"}),
    frozenset({"vegetable", "corn"}),
    frozenset({"vegetable", "soybean"}),
})

# Keyword lists for the advisory nutrition vertices (substring match on ingredient lines)
NUTRITION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "protein": (
        "meat", "chicken", "beef", "pork", "fish", "tofu", "lentil", "bean",
        "egg", "nuts", "seed", "protein",
    ),
    "vegetables": (
        "vegetable", "carrot", "broccoli", "spinach", "kale", "tomato", "pepper",
        "onion", "lettuce", "cabbage", "zucchini", "eggplant", "cucumber", "avocado",
    ),
    "grains": (
        "rice", "pasta", "bread", "flour", "oat", "grain", "wheat", "quinoa",
        "barley", "cereal", "corn", "couscous", "tortilla",
    ),
    "dairy": (
        "milk", "cheese", "yogurt", "cream", "butter", "dairy", "cheddar",
        "mozzarella", "parmesan",
    ),
}
