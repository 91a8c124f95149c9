"""
Shared template configuration for the application.
"""
from pathlib import Path

from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader

from signup_backend.core.config import settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def create_templates_instance() -> Jinja2Templates:
    """Create a Jinja2Templates instance with the admin path available to every page."""
    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=True)
    env.globals["admin_path"] = settings.ADMIN_PATH
    return Jinja2Templates(env=env)


# Global templates instance
templates = create_templates_instance()
