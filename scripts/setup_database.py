#!/usr/bin/env python3
"""Database setup script for BusinessHub.

Creates the schema for the configured DATABASE_URL and optionally seeds
defaults or imports businesses from a CSV file.

Usage:
    # Create tables
    python scripts/setup_database.py

    # Create tables and seed the admin account, categories, site settings,
    # content strings and services
    python scripts/setup_database.py --seed

    # Import businesses from CSV (existing placeids are updated)
    python scripts/setup_database.py --import-csv businesses.csv --update-duplicates

    # Drop and recreate everything
    python scripts/setup_database.py --drop --seed
"""

import argparse
import sys
from pathlib import Path

from businesshub.config.settings import get_settings
from businesshub.core.exceptions import BusinessHubError
from businesshub.db.database import drop_db, get_session_factory, init_db
from businesshub.models import Category, ContentString, Service, SiteSetting
from businesshub.services import csv_import
from businesshub.services.catalog import create_service
from businesshub.services.categories import get_or_create_category
from businesshub.services.content_strings import create_string
from businesshub.services.site_settings import upsert_setting
from businesshub.services.users import ensure_admin

# =============================================================================
# Seed Data
# =============================================================================

DEFAULT_CATEGORIES = [
    "Restaurants",
    "Cafes",
    "Bakeries",
    "Bars",
    "Retail",
    "Health & Beauty",
    "Home Services",
    "Automotive",
]

DEFAULT_SITE_SETTINGS = [
    ("site_title", "Business Directory", "Main title of the website", "general"),
    ("site_description", "Find the best local businesses in your area", "Site meta description for SEO", "seo"),
    ("contact_email", "contact@businessdirectory.com", "Main contact email address", "contact"),
    ("support_phone", "+1 (555) 123-4567", "Support phone number", "contact"),
    ("featured_businesses_limit", 6, "Number of featured businesses to display on homepage", "display"),
    ("enable_user_registration", True, "Allow new user registrations", "features"),
]

DEFAULT_CONTENT_STRINGS = [
    # (key, English, Spanish, category, description)
    ("header.siteTitle", "BusinessHub", "BusinessHub", "navigation", "Site name shown in the header"),
    ("header.navigation.home", "Home", "Inicio", "navigation", "Home link"),
    ("header.navigation.categories", "Categories", "Categorías", "navigation", "Categories link"),
    ("header.navigation.featured", "Featured", "Destacados", "navigation", "Featured businesses link"),
    ("header.navigation.addBusiness", "Add Business", "Agregar negocio", "navigation", "Submit a listing link"),
    ("search.placeholder.query", "What are you looking for?", "¿Qué estás buscando?", "search", "Search box placeholder"),
    ("search.placeholder.location", "City or neighborhood", "Ciudad o barrio", "search", "Location box placeholder"),
    ("search.button", "Search", "Buscar", "search", "Search button"),
    ("search.noResults", "No businesses found", "No se encontraron negocios", "search", "Empty search result"),
    ("forms.submit", "Submit", "Enviar", "forms", "Generic submit button"),
    ("forms.cancel", "Cancel", "Cancelar", "forms", "Generic cancel button"),
    ("forms.required", "This field is required", "Este campo es obligatorio", "forms", "Required field message"),
    ("errors.network.title", "Connection problem", "Problema de conexión", "errors", "Network error heading"),
    ("errors.notFound.title", "Page not found", "Página no encontrada", "errors", "404 heading"),
    ("business.featured.badge", "Featured", "Destacado", "business", "Badge on featured listings"),
    ("business.verified.badge", "Verified", "Verificado", "business", "Badge on verified listings"),
    ("business.contact.button", "Contact", "Contactar", "business", "Contact form button"),
    ("homepage.hero.title", "Find Local Businesses", "Encuentra negocios locales", "homepage", "Hero heading"),
    ("homepage.hero.subtitle", "Discover trusted businesses near you", "Descubre negocios de confianza cerca de ti", "homepage", "Hero subheading"),
]

DEFAULT_SERVICES = [
    ("Teeth Cleaning", "Professional dental cleaning and plaque removal", "Dental"),
    ("Dental Implants", "Permanent replacement for missing teeth", "Dental"),
    ("Orthodontics", "Braces and aligners to straighten teeth", "Dental"),
    ("Teeth Whitening", "Cosmetic whitening treatments", "Dental"),
    ("Root Canal Treatment", "Treatment of infected tooth pulp", "Dental"),
]


def seed(db) -> None:
    """Create the bootstrap admin and any missing default categories, settings, content strings and services."""
    settings = get_settings()
    if settings.admin_email and settings.admin_password:
        ensure_admin(db, settings.admin_email, settings.admin_password.get_secret_value())
        print(f"  Admin account: {settings.admin_email}")
    else:
        print("  Skipping admin account (ADMIN_EMAIL / ADMIN_PASSWORD not set)")

    before = db.query(Category).count()
    for name in DEFAULT_CATEGORIES:
        get_or_create_category(db, name)
    print(f"  Categories: {db.query(Category).count() - before} created")

    created = 0
    for key, value, description, category in DEFAULT_SITE_SETTINGS:
        if db.query(SiteSetting).filter(SiteSetting.key == key).first() is None:
            upsert_setting(db, key, value, description=description, category=category)
            created += 1
    print(f"  Site settings: {created} created")

    created = 0
    for key, english, spanish, category, description in DEFAULT_CONTENT_STRINGS:
        if db.query(ContentString).filter(ContentString.string_key == key).first() is None:
            create_string(db, {
                "string_key": key,
                "default_value": english,
                "translations": {"en": english, "es": spanish},
                "category": category,
                "description": description,
            })
            created += 1
    print(f"  Content strings: {created} created")

    created = 0
    for name, description, category in DEFAULT_SERVICES:
        if db.query(Service).filter(Service.name == name).first() is None:
            create_service(db, {"name": name, "description": description, "category": category})
            created += 1
    print(f"  Services: {created} created")


def import_csv(db, path: Path, options: csv_import.ImportOptions) -> bool:
    """Import businesses from a CSV file; returns True when no row failed."""
    result = csv_import.import_businesses(db, path.read_bytes(), options)

    print(f"  Rows: {result.total_rows}")
    print(f"  Created: {result.created}")
    print(f"  Updated: {result.updated}")
    print(f"  Duplicates skipped: {result.duplicates_skipped}")
    for issue in result.errors:
        print(f"  ERROR row {issue.row} [{issue.field}]: {issue.message}")
    for issue in result.warnings:
        print(f"  WARN  row {issue.row} [{issue.field}]: {issue.message}")
    return result.success


def main():
    """Main entry point for the setup script."""
    parser = argparse.ArgumentParser(
        description='Create and seed the BusinessHub database',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Create tables only
    python scripts/setup_database.py

    # Seed defaults
    python scripts/setup_database.py --seed

    # Validate a CSV without writing
    python scripts/setup_database.py --import-csv data.csv --validate-only
        """
    )

    parser.add_argument(
        '--drop',
        action='store_true',
        help='Drop all tables before creating them (deletes all data!)'
    )

    parser.add_argument(
        '--seed',
        action='store_true',
        help="Seed the admin account, categories, site settings, content strings and services"
    )

    parser.add_argument(
        '--import-csv',
        type=Path,
        metavar='PATH',
        help='Import businesses from a CSV file'
    )

    parser.add_argument(
        '--update-duplicates',
        action='store_true',
        help='Update businesses whose placeid already exists'
    )

    parser.add_argument(
        '--skip-duplicates',
        action='store_true',
        help='Skip businesses whose placeid already exists'
    )

    parser.add_argument(
        '--validate-only',
        action='store_true',
        help='Only validate the CSV file'
    )

    args = parser.parse_args()
    settings = get_settings()

    print("\n" + "=" * 70)
    print(f"BusinessHub database setup ({settings.app_env})")
    print("=" * 70)

    try:
        if args.drop:
            print("\n" + "!" * 70)
            print("WARNING: Dropping all tables!")
            print("!" * 70)
            drop_db()

        init_db()
        print("\nSchema ready.")

        ok = True
        db = get_session_factory()()
        try:
            if args.seed:
                print("\nSeeding:")
                seed(db)

            if args.import_csv:
                if not args.import_csv.exists():
                    print(f"\nError: file not found: {args.import_csv}")
                    sys.exit(1)
                print(f"\nImporting {args.import_csv}:")
                ok = import_csv(
                    db,
                    args.import_csv,
                    csv_import.ImportOptions(
                        update_duplicates=args.update_duplicates,
                        skip_duplicates=args.skip_duplicates,
                        validate_only=args.validate_only,
                    ),
                )
        finally:
            db.close()
    except BusinessHubError as e:
        print(f"\nError: {e}")
        sys.exit(1)

    print("\n" + "=" * 70)
    sys.exit(0 if ok else 1)


if __name__ == '__main__':
    main()
