#!/usr/bin/env python3

import sys
import json
from pathlib import Path
from models.category_node import CategoryKind
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all reportable categories in report order."""
    found = False
    for kind in (CategoryKind.INCOME, CategoryKind.EXPENSE):
        descriptors = list(services.categories.walk(kind))
        if not descriptors:
            continue
        found = True

        logger.info(f"\n{kind.value.capitalize()} categories:")
        logger.info("=" * 80)
        for descriptor in descriptors:
            marker = " (rollup)" if descriptor.has_children else ""
            logger.info(f"{descriptor.category_id:>5}  {descriptor.full_name}{marker}")

    if not found:
        logger.info("No categories found.")


def cmd_create(args, services):
    """Create a new category."""
    kind = CategoryKind(args.kind)

    parent_id = None
    if args.parent:
        parent = services.categories.find_by_name(args.parent, kind)
        if not parent:
            logger.error(f"Parent category '{args.parent}' ({kind.value}) not found.")
            sys.exit(1)
        parent_id = parent.id

    try:
        category = services.categories.create(
            args.name, kind, parent_id, hidden=args.hidden
        )
    except ValueError as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)

    logger.info(f"✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {services.categories.full_name(category)}")
    logger.info(f"  Kind: {category.kind.value}")


def cmd_delete(args, services):
    """Delete a category by ID."""
    category = services.categories.find(args.category_id)
    if not category:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    if services.categories.children_of(category.id):
        logger.error(f"Category '{category.name}' has sub-categories; delete them first.")
        sys.exit(1)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {services.categories.full_name(category)}")

    confirm = (
        input("\nAre you sure you want to delete this category? (yes/no): ")
        .strip()
        .lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    try:
        if services.categories.delete(category.id):
            logger.info(f"✓ Category '{category.name}' deleted successfully.")
        else:
            logger.error("Failed to delete category.")
            sys.exit(1)
    except Exception as e:
        logger.error(f"Error deleting category: {e}")
        sys.exit(1)


def seed_categories(services, categories_data, parent=None, kind=None):
    """Create categories from nested seed data, skipping existing ones.

    Args:
        services: Services container.
        categories_data: List of {"name", "kind", "children"} dictionaries.
        parent: Parent Category for this level, None at the top.
        kind: CategoryKind inherited from the parent.

    Returns:
        Tuple of (created count, skipped count).
    """
    created_count = 0
    skipped_count = 0

    for category_data in categories_data:
        name = category_data.get("name")
        if not name:
            logger.warning("Skipping category with no name")
            continue

        category_kind = kind or CategoryKind(category_data.get("kind", "expense"))
        prefix = services.categories.full_name(parent) + ":" if parent else ""
        full_name = prefix + name

        category = services.categories.find_by_name(full_name, category_kind)
        if category:
            logger.info(f"⊘ Skipped '{full_name}' (already exists)")
            skipped_count += 1
        else:
            category = services.categories.create(
                name, category_kind, parent.id if parent else None
            )
            logger.info(f"✓ Created '{full_name}' (ID: {category.id})")
            created_count += 1

        created, skipped = seed_categories(
            services, category_data.get("children", []), category, category_kind
        )
        created_count += created
        skipped_count += skipped

    return created_count, skipped_count


def cmd_seed(args, services):
    """Seed categories from JSON file."""
    seed_file = (
        Path(args.file)
        if args.file
        else Path(__file__).parent.parent / "db" / "seed" / "categories.json"
    )

    if not seed_file.exists():
        logger.error(f"Seed file not found: {seed_file}")
        sys.exit(1)

    try:
        with open(seed_file, "r") as f:
            categories_data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing JSON file: {e}")
        sys.exit(1)

    logger.info(f"\nSeeding categories from {seed_file}")
    logger.info("=" * 80)

    created_count, skipped_count = seed_categories(services, categories_data)

    logger.info("=" * 80)
    logger.info("\nSeeding complete!")
    logger.info(f"Created: {created_count}")
    logger.info(f"Skipped: {skipped_count}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, and delete income and expense categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser(
        "list", help="List categories in report order"
    )
    list_parser.set_defaults(func=cmd_list)

    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    create_parser.add_argument("name", help="Category name, e.g. Fuel")
    create_parser.add_argument(
        "--kind",
        choices=[CategoryKind.INCOME.value, CategoryKind.EXPENSE.value],
        default=CategoryKind.EXPENSE.value,
        help="Category kind (default: expense)",
    )
    create_parser.add_argument(
        "--parent", help="Full name of the parent category, e.g. Auto"
    )
    create_parser.add_argument(
        "--hidden", action="store_true", help="Hide the category from reports"
    )
    create_parser.set_defaults(func=cmd_create)

    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.set_defaults(func=cmd_delete)

    seed_parser = categories_subparsers.add_parser(
        "seed", help="Seed categories from JSON file"
    )
    seed_parser.add_argument(
        "--file", help="Seed file (default: db/seed/categories.json)"
    )
    seed_parser.set_defaults(func=cmd_seed)
