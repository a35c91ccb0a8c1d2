import pytest

from pathmapper import PathMapper

# handlers
home_handler = lambda: "home"  # noqa: E731
date_handler = lambda: "date"  # noqa: E731
us_date_handler = lambda: "us_date"  # noqa: E731
seo_handler = lambda: "seo"  # noqa: E731
user_handler = lambda: "user"  # noqa: E731
user_profile_handler = lambda: "user_profile"  # noqa: E731


@pytest.fixture
def mapper() -> PathMapper:
    return PathMapper(
        [
            ("/", home_handler),
            ("/date/:year/:month/:day", date_handler),
            ("/date/:year/:day/:month/US", us_date_handler),
            ("/seo/*", seo_handler),
            ("/user/:id", user_handler),
            ("/user/:id/profile", user_profile_handler),
        ]
    )
