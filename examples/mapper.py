# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "pathmapper @ file:///${PROJECT_ROOT}/../pathmapper",
# ]
# ///
from pathmapper import PathMapper


# handlers
def home() -> str:
    return "home"


def date(year: str, month: str, day: str) -> str:
    return f"date {year}-{month}-{day}"


def us_date(year: str, month: str, day: str) -> str:
    return f"us date {month}/{day}/{year}"


def seo(*rest: str) -> str:
    return f"seo {'/'.join(rest)}"


mapper = PathMapper(
    [
        ("/", home),
        ("/date/:year/:month/:day", date),
        ("/date/:year/:day/:month/US", us_date),
        ("/seo/*", seo),
    ]
)


def dispatch(path: str) -> str:
    match = mapper.lookup(path)
    if match is None:
        return "404"
    if match.variables:
        return match.handler(**match.variables)
    return match.handler(*match.values)


def main() -> None:
    print(mapper.format(tree=True))
    print()
    for path in [
        "/",
        "/date/2012/12/25",
        "/date/2012/25/12/US",
        "/date/2012/25/12/UK",
        "/seo/some/long/slug",
    ]:
        print(f"{path:<24} > {dispatch(path)}")


if __name__ == "__main__":
    main()
