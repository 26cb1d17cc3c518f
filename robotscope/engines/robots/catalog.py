"""
Static catalogs consulted by the fingerprint scan and the protection audit.

All paths are lowercase because the parser lowercases allow/disallow values.
"""

from __future__ import annotations

# Confidence added per signature pattern found among allow/disallow paths
SIGNATURE_PATTERN_WEIGHT = 25
SIGNATURE_DETECTION_THRESHOLD = 50

# Fraction of a category's paths that may be left open before it is flagged
UNPROTECTED_RATIO_THRESHOLD = 0.3

CRAWL_DELAY_WARNING_SECONDS = 5


# ─────────────────────────────────────────────
# Web application signatures
# ─────────────────────────────────────────────

SIGNATURES: dict[str, list[str]] = {
    "WordPress": ["/wp-admin", "/wp-content", "/wp-includes", "/wp-json"],
    "Drupal": ["/node/add", "/user/register", "/admin/config", "/sites/default"],
    "Joomla": ["/administrator", "/components/", "/templates/", "/libraries/"],
    "Magento": ["/catalogsearch", "/checkout/cart", "/customer/account", "/downloader"],
    "Shopify": ["/cart", "/orders", "/checkouts", "/collections/"],
    "Ghost": ["/ghost/", "/p/", "/email/", "/r/"],
    "Laravel": ["/storage/", "/vendor/", "/nova", "/telescope"],
    "Django": ["/django-admin", "/static/admin", "/accounts/login", "/__debug__"],
    "Rails": ["/rails/", "/users/sign_in", "/sidekiq", "/active_storage"],
}


# ─────────────────────────────────────────────
# Sensitive path categories
# ─────────────────────────────────────────────

SENSITIVE_PATHS: dict[str, list[str]] = {
    "admin": ["/admin", "/administrator", "/wp-admin", "/dashboard", "/manage"],
    "auth": ["/login", "/signin", "/signup", "/register", "/wp-login.php"],
    "user": ["/user", "/account", "/profile", "/my-account"],
    "ecommerce": ["/cart", "/checkout", "/orders", "/basket"],
    "api": ["/api", "/graphql", "/wp-json", "/rest"],
    "sensitive": ["/.git", "/.env", "/config", "/backup", "/private"],
    "media": ["/wp-content/uploads", "/media", "/uploads", "/files"],
}

CATEGORY_LABELS: dict[str, str] = {
    "admin": "administration",
    "auth": "authentication",
    "user": "user account",
    "ecommerce": "e-commerce",
    "api": "API",
    "sensitive": "sensitive file",
    "media": "media upload",
}

# Categories worth auditing once a framework is recognised
RELEVANT_CATEGORIES: dict[str, set[str]] = {
    "WordPress": {"admin", "media"},
    "Drupal": {"admin", "user"},
    "Joomla": {"admin"},
    "Magento": {"ecommerce", "admin"},
    "Shopify": {"ecommerce", "admin"},
    "Ghost": {"admin"},
    "Laravel": {"admin", "api"},
    "Django": {"admin", "auth"},
    "Rails": {"admin", "auth"},
}


# ─────────────────────────────────────────────
# Framework-specific checks
# ─────────────────────────────────────────────

WORDPRESS_PROTECTED_PATHS = ["/wp-admin", "/wp-includes", "/wp-content/plugins", "/wp-content/themes"]
WORDPRESS_SITEMAP_NAMES = ["sitemap.xml", "sitemap_index.xml"]
DRUPAL_PROTECTED_PATHS = ["/admin", "/node/add", "/user/register", "/install.php"]
MAGENTO_ADMIN_PATH = "/admin"
SHOPIFY_KEY_PATHS = ["/admin", "/cart", "/checkout", "/orders"]


# ─────────────────────────────────────────────
# Penalties
# ─────────────────────────────────────────────

PENALTIES: dict[str, int] = {
    "missing-global-rule": 20,
    "wordpress-unprotected": 15,
    "wordpress-missing-sitemap": 5,
    "drupal-unprotected": 15,
    "magento-admin-exposed": 15,
    "shopify-unprotected": 10,
    "category-under-protected": 5,
    "missing-sitemap": 10,
    "high-crawl-delay": 10,
    "complex-wildcard": 3,
    "shopify-key-paths": 3,
}
