from sqlmodel import Session
from siteadmin.core.config import settings
from siteadmin.core.security import get_password_hash
from siteadmin.db.session import engine, create_db_and_tables
from siteadmin.models.category import CategoryCreate
from siteadmin.models.option import OptionGroup
from siteadmin.models.user import User, Role
from siteadmin.services.auth import find_user_by_email
from siteadmin.services.category import CategoryService
from siteadmin.services.option import OptionService

DEFAULT_OPTIONS = [
    {
        "key": "site_title",
        "value": "Site Admin",
        "group": OptionGroup.GENERAL,
        "is_public": True,
        "description": "The name of your website",
    },
    {
        "key": "site_description",
        "value": "A content-managed website",
        "group": OptionGroup.GENERAL,
        "is_public": True,
        "description": "The description of your website used for SEO",
    },
    {
        "key": "site_url",
        "value": "http://localhost:8000",
        "group": OptionGroup.GENERAL,
        "is_public": True,
        "description": "The public URL of your website",
    },
    {
        "key": "ai_config",
        "value": '{"activeProvider": "openai", "providers": [{"name": "openai", "baseUrl": "https://api.openai.com/v1", "apiKey": "", "model": "gpt-4o"}]}',
        "group": OptionGroup.AI,
        "type": "json",
        "is_public": False,
        "description": "Configuration for AI providers",
    },
    {
        "key": "seo_keywords",
        "value": "cms, fastapi, sqlmodel",
        "group": OptionGroup.SEO,
        "is_public": True,
        "description": "Comma-separated keywords for SEO",
    },
]

DEFAULT_CATEGORIES = {
    "News": ["Company", "Industry"],
    "Products": ["Hardware", "Software"],
}


def seed():
    print("Creating database and tables...")
    create_db_and_tables()

    with Session(engine) as session:
        print("Seeding options...")
        options = OptionService(session)
        for option in DEFAULT_OPTIONS:
            options.seed_option(**option)

        admin_email = "admin@example.com"
        if not find_user_by_email(session, admin_email):
            print(f"Creating admin account {admin_email} (password: change-me-now)")
            session.add(User(
                name="Administrator",
                email=admin_email,
                password_hash=get_password_hash("change-me-now"),
                role=Role.ADMIN.value,
            ))
            session.commit()

        categories = CategoryService(session)
        if categories.list_categories():
            print("Categories already exist. Skipping category seed.")
            return

        print("Seeding categories...")
        for index, (parent_name, child_names) in enumerate(DEFAULT_CATEGORIES.items()):
            parent = categories.create_category(CategoryCreate(name=parent_name, slug=parent_name.lower(), sort_order=index))
            for child_index, child_name in enumerate(child_names):
                categories.create_category(CategoryCreate(
                    name=child_name,
                    slug=f"{parent.slug}-{child_name.lower()}",
                    parent_id=parent.id,
                    sort_order=child_index,
                ))

    print(f"Done. Database: {settings.DATABASE_URL}")


if __name__ == "__main__":
    seed()
