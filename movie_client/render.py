from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from movie_client.models import DisplayableImage, MovieSummary

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Environment(loader=FileSystemLoader(TEMPLATES_DIR), autoescape=select_autoescape())


def render_row(movie: MovieSummary, image: DisplayableImage, owned: bool = False) -> str:
    """Markup of one list row, with a delete control for owned movies and a rating form otherwise."""
    template = templates.get_template("owned_movie_row.html" if owned else "movie_row.html")
    return template.render(movie=movie, image=image)
