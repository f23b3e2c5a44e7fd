# Overview: Flask CLI command groups for bootstrap and inspection.

# backend/storeadmin/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init [--username admin --password "Password123!"]
#   Idempotent bootstrap: creates tables, default roles, device brands and an admin user.
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Permission inspection:
# - python -m flask perms list [--category SALES] [--role cashier_role]
#   List permission codes (optionally filtered by category or role).
# - python -m flask perms check admin manage_users
#   Check whether a user has a permission.
#
# Role maintenance:
# - python -m flask roles list
#   List roles with their permission counts.
# - python -m flask roles toggle cashier_role view_sales
#   Grant or revoke one permission on a role.
#
# Location inspection:
# - python -m flask locations list [--type STORE]
# - python -m flask locations warehouses <store_id>
#   Names of the warehouses a store is linked to.
#
# Register inspection:
# - python -m flask registers list [--store-id <store_id>]
# - python -m flask registers brands
#
# User inspection:
# - python -m flask users list
# - python -m flask users eligible-registers <username>
#   Registers the user may be assigned to.

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .permissions import PermissionCategory, get_all_permission_codes, get_permission_definition
from .services import location_service, register_service, role_service, user_service
from .validation import PersistenceError, ValidationError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@click.option('--username', default='admin', help='Administrator username')
@click.option('--password', default='Password123!', help='Administrator password')
@click.option('--first-name', default='Administrator', help='Administrator first name')
@with_appcontext
def init_system(username, password, first_name):
    """
    Initialize the admin data: tables, roles, device brands and one administrator.

    Safe to run repeatedly; existing rows are left alone.

    SECURITY: Change the administrator password immediately in production!
    """
    click.echo("START Initializing storeadmin...")

    db.create_all()

    created_roles = role_service.ensure_default_roles()
    click.echo(f"PASS Default roles ready ({created_roles} created)")

    created_brands = register_service.ensure_default_brands()
    click.echo(f"PASS Device brands ready ({created_brands} created)")

    if user_service.get_user_by_username(username):
        click.echo(f"PASS Using existing user: {username}")
        return

    try:
        user = user_service.create_user(
            username=username,
            first_name=first_name,
            password=password,
            role_id=current_app.config["ADMIN_ROLE_ID"],
        )
    except (ValidationError, PersistenceError) as exc:
        click.echo(f"FAIL Failed to create administrator: {exc}")
        return

    click.echo(f"PASS Created administrator: {user.username} (ID: {user.id})")
    click.echo("SECURITY Password securely hashed with bcrypt")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system init' to initialize.")


# =============================================================================
# PERMISSIONS
# =============================================================================

@click.group('perms')
def perms_group():
    """Permission inspection commands."""


@perms_group.command('list')
@click.option('--category', type=click.Choice(PermissionCategory.all()), help='Filter by category')
@click.option('--role', 'role_id', help='Only codes granted to this role id')
@with_appcontext
def list_permissions_cli(category, role_id):
    """List permission codes in catalog order."""
    codes = get_all_permission_codes()

    if role_id:
        role = role_service.get_role(role_id)
        if not role:
            click.echo(f"FAIL Role '{role_id}' not found")
            return
        codes = [code for code in codes if code in role.permission_set]

    click.echo("\n" + "="*90)
    click.echo(f"{'Code':<20} {'Category':<16} {'Name'}")
    click.echo("="*90)

    for code in codes:
        definition = get_permission_definition(code)
        if category and definition["category"] != category:
            continue
        click.echo(f"{code:<20} {definition['category']:<16} {definition['name']}")

    click.echo("="*90 + "\n")


@perms_group.command('check')
@click.argument('username')
@click.argument('permission_code')
@with_appcontext
def check_permission_cli(username, permission_code):
    """Check if a user has a specific permission."""
    user = user_service.get_user_by_username(username)

    if not user:
        click.echo(f"FAIL User '{username}' not found")
        return

    if user_service.user_has_permission(user, permission_code):
        click.echo(f"PASS User '{username}' HAS permission '{permission_code}'")
    else:
        click.echo(f"FAIL User '{username}' DOES NOT HAVE permission '{permission_code}'")

    role = role_service.get_role(user.role_id)
    click.echo(f"\nUser role: {role.name if role else 'none (' + user.role_id + ' missing)'}")
    click.echo(f"Role class: {user.role_class}")


# =============================================================================
# ROLES
# =============================================================================

@click.group('roles')
def roles_group():
    """Role inspection and maintenance commands."""


@roles_group.command('list')
@with_appcontext
def list_roles_cli():
    """List all roles with their permission counts."""
    roles = role_service.list_roles()

    if not roles:
        click.echo("No roles found. Run 'python -m flask system init' first.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<24} {'Name':<24} {'Permissions'}")
    click.echo("="*80)

    for role in roles:
        click.echo(f"{role.id:<24} {role.name:<24} {len(role.permission_set)}")

    click.echo("="*80 + "\n")


@roles_group.command('toggle')
@click.argument('role_id')
@click.argument('permission_code')
@with_appcontext
def toggle_role_permission_cli(role_id, permission_code):
    """Grant a permission the role lacks, or revoke one it has."""
    role = role_service.get_role(role_id)
    if not role:
        click.echo(f"FAIL Role '{role_id}' not found")
        return

    try:
        permissions = role_service.toggle_permission(role, permission_code)
        role_service.update_role(role.id, role.name, permissions)
    except (ValidationError, PersistenceError) as exc:
        click.echo(f"FAIL {exc}")
        return

    state = "granted" if permission_code in permissions else "revoked"
    click.echo(f"PASS Permission '{permission_code}' {state} on role '{role.name}'")


# =============================================================================
# LOCATIONS
# =============================================================================

@click.group('locations')
def locations_group():
    """Location inspection commands."""


@locations_group.command('list')
@click.option('--type', 'location_type', type=click.Choice(['STORE', 'WAREHOUSE'], case_sensitive=False))
@with_appcontext
def list_locations_cli(location_type):
    """List stores and warehouses."""
    locations = location_service.list_locations(location_type)

    if not locations:
        click.echo("No locations found.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<20} {'Type':<10} {'Name'}")
    click.echo("="*80)

    for location in locations:
        click.echo(f"{location.id:<20} {location.type:<10} {location.name}")

    click.echo("="*80 + "\n")


@locations_group.command('warehouses')
@click.argument('store_id')
@with_appcontext
def store_warehouses_cli(store_id):
    """Show the warehouses a store is linked to."""
    store = location_service.get_location(store_id)
    if not store:
        click.echo(f"FAIL Location '{store_id}' not found")
        return

    names = location_service.resolve_linked_warehouse_names(store)
    if not names:
        click.echo(f"Store '{store.name}' has no linked warehouses.")
        return

    click.echo(f"Warehouses linked to '{store.name}':")
    for name in names:
        click.echo(f"  - {name}")


# =============================================================================
# REGISTERS
# =============================================================================

@click.group('registers')
def registers_group():
    """Cash register inspection commands."""


@registers_group.command('list')
@click.option('--store-id', help='Only registers of this store')
@with_appcontext
def list_registers_cli(store_id):
    """List cash registers with their device labels."""
    registers = register_service.list_registers(store_id)

    if not registers:
        click.echo("No cash registers found.")
        return

    locations = location_service.list_locations()
    for register in registers:
        click.echo(f"{register.id:<20} {register_service.describe_register(register, locations)}")


@registers_group.command('brands')
@with_appcontext
def list_brands_cli():
    """List the device brand catalog."""
    brands = register_service.list_brands()
    if not brands:
        click.echo("No device brands found.")
        return
    click.echo(", ".join(brands))


# =============================================================================
# USERS
# =============================================================================

@click.group('users')
def users_group():
    """User inspection commands."""


@users_group.command('list')
@with_appcontext
def list_users_cli():
    """List all users with their roles."""
    users = user_service.list_users()

    if not users:
        click.echo("No users found.")
        return

    roles = {role.id: role.name for role in role_service.list_roles()}

    click.echo("\n" + "="*100)
    click.echo(f"{'ID':<20} {'Username':<20} {'Name':<30} {'Class':<8} {'Role'}")
    click.echo("="*100)

    for user in users:
        full_name = f"{user.first_name} {user.last_name}".strip()
        role_name = roles.get(user.role_id, "none")
        click.echo(f"{user.id:<20} {user.username:<20} {full_name:<30} {user.role_class:<8} {role_name}")

    click.echo("="*100 + "\n")


@users_group.command('eligible-registers')
@click.argument('username')
@with_appcontext
def eligible_registers_cli(username):
    """List the cash registers a user may be assigned to."""
    user = user_service.get_user_by_username(username)
    if not user:
        click.echo(f"FAIL User '{username}' not found")
        return

    registers = user_service.eligible_cash_registers(user)
    if not registers:
        click.echo(f"No cash registers available for '{username}'.")
        return

    locations = location_service.list_locations()
    for register in registers:
        click.echo(f"{register.id:<20} {register_service.describe_register(register, locations)}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(perms_group)
    app.cli.add_command(roles_group)
    app.cli.add_command(locations_group)
    app.cli.add_command(registers_group)
    app.cli.add_command(users_group)
