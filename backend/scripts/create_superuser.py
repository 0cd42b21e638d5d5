#!/usr/bin/env python
import os
import sys
import django
from dotenv import load_dotenv

# Add parent directory to Python path for Django imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env'))

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'college_portal.settings')
django.setup()

from django.contrib.auth import get_user_model
from rich.console import Console

console = Console()


def create_superuser():
    User = get_user_model()
    username = os.getenv('DEV_ADMIN_USER', 'devadmin')
    password = os.getenv('DEV_ADMIN_USER_PASSWORD', 'admin123!')
    first_name = os.getenv('DEV_ADMIN_FIRST_NAME', 'Admin')
    last_name = os.getenv('DEV_ADMIN_LAST_NAME', 'User')

    if User.objects.filter(username=username).exists():
        console.print(f"[yellow]Superuser '{username}' already exists![/yellow]")
        return

    User.objects.create_superuser(
        username,
        password,
        email=f"{username}@example.com",
        first_name=first_name,
        last_name=last_name,
    )
    console.print(f"[green]Superuser '{username}' created (registrar, staff).[/green]")


if __name__ == "__main__":
    create_superuser()
