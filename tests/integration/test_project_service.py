import pytest

from woodys.db import schemas
from woodys.errors import NotFoundError, UnauthorizedError, ValidationError


def test_create_project_defaults(services, make_user):
    owner = make_user()
    project = services.projects.create_project(
        schemas.ProjectCreate(title="Oak Table", materials=["oak", "oak", "glue"], time_to_build=240),
        owner.id,
    )
    assert project.owner_id == owner.id
    assert project.average_rating == 0.0
    assert project.rating_count == 0
    assert project.materials == ["glue", "oak"]


def test_create_project_requires_known_caller(services):
    payload = schemas.ProjectCreate(title="Oak Table")
    with pytest.raises(UnauthorizedError):
        services.projects.create_project(payload, None)
    with pytest.raises(NotFoundError) as exc:
        services.projects.create_project(payload, 4242)
    assert str(exc.value).startswith("failed to create project")


@pytest.mark.parametrize(
    "fields,field",
    [
        ({"title": "ab"}, "title"),
        ({"title": "t" * 201}, "title"),
        ({"title": "Fine", "description": "d" * 5001}, "description"),
        ({"title": "Fine", "tutorial": "t" * 10001}, "tutorial"),
        ({"title": "Fine", "time_to_build": -5}, "time_to_build"),
    ],
)
def test_create_project_validation(services, make_user, fields, field):
    owner = make_user()
    with pytest.raises(ValidationError) as exc:
        services.projects.create_project(schemas.ProjectCreate(**fields), owner.id)
    assert exc.value.field == field


def test_update_project_owner_only_and_partial(services, make_user, make_project):
    owner = make_user()
    other = make_user()
    project = make_project(owner, title="Oak Table", style=["rustic"])

    with pytest.raises(UnauthorizedError):
        services.projects.update_project(project.id, schemas.ProjectUpdate(title="Stolen"), other.id)

    updated = services.projects.update_project(project.id, schemas.ProjectUpdate(description="Now with drawers"), owner.id)
    assert updated.title == "Oak Table"
    assert updated.style == ["rustic"]
    assert updated.description == "Now with drawers"


def test_update_project_invalid_title_leaves_row_unchanged(services, make_user, make_project):
    owner = make_user()
    project = make_project(owner, title="Oak Table")
    with pytest.raises(ValidationError):
        services.projects.update_project(project.id, schemas.ProjectUpdate(title="x"), owner.id)
    assert services.projects.get_project(project.id).title == "Oak Table"


def test_delete_project_removes_dependents(services, repos, make_user, make_project):
    owner = make_user()
    fan = make_user()
    project = make_project(owner)
    services.ratings.create_rating(project.id, schemas.RatingCreate(value=5), fan.id)
    comment = services.comments.create_comment(project.id, schemas.CommentCreate(content="Nice"), fan.id)
    services.comments.create_reply(comment.id, schemas.CommentCreate(content="Thanks"), owner.id)
    favorites = services.project_lists.create_project_list(schemas.ProjectListCreate(name="Favorites"), fan.id)
    services.project_lists.add_project_to_list(favorites.id, project.id, fan.id)

    with pytest.raises(UnauthorizedError):
        services.projects.delete_project(project.id, fan.id)
    services.projects.delete_project(project.id, owner.id)

    with pytest.raises(NotFoundError):
        services.projects.get_project(project.id)
    assert repos.ratings.find_by_user_and_project(fan.id, project.id) is None
    with pytest.raises(NotFoundError):
        repos.comments.get(comment.id)
    assert repos.project_lists.item_counts([favorites.id]) == {}


def test_delete_unknown_project(services, make_user):
    with pytest.raises(NotFoundError):
        services.projects.delete_project(999, make_user().id)


def test_search_filters(services, make_user, make_project):
    owner = make_user()
    bench = make_project(owner, title="Garden bench", style=["rustic"], environment=["outdoor"], materials=["cedar"], time_to_build=300)
    table = make_project(owner, title="Dining table", style=["modern", "rustic"], environment=["indoor"], materials=["oak"], time_to_build=900)
    make_project(owner, title="Spice rack", style=["modern"], environment=["indoor"], materials=["pine"], time_to_build=60)

    def ids(**kwargs):
        return {p.id for p in services.projects.search_projects(schemas.ProjectSearchFilters(**kwargs))}

    assert ids(style=["rustic"]) == {bench.id, table.id}
    assert ids(style=["rustic", "modern"]) == {table.id}
    assert ids(environment=["outdoor"]) == {bench.id}
    assert ids(materials=["oak"], max_time_to_build=1000) == {table.id}
    assert ids(max_time_to_build=300, style=["rustic"]) == {bench.id}
    assert ids(q="TABLE") == {table.id}
    assert ids(style=["baroque"]) == set()
    assert len(ids()) == 3


def test_search_rating_filter_and_ordering(services, make_user, make_project):
    owner = make_user()
    raters = [make_user() for _ in range(2)]
    low = make_project(owner, title="Low rated")
    high = make_project(owner, title="High rated")
    services.ratings.create_rating(low.id, schemas.RatingCreate(value=2), raters[0].id)
    services.ratings.create_rating(high.id, schemas.RatingCreate(value=5), raters[0].id)
    services.ratings.create_rating(high.id, schemas.RatingCreate(value=4), raters[1].id)

    results = services.projects.search_projects(schemas.ProjectSearchFilters())
    assert [p.id for p in results][:2] == [high.id, low.id]
    filtered = services.projects.search_projects(schemas.ProjectSearchFilters(min_rating=4))
    assert [p.id for p in filtered] == [high.id]


def test_search_rejects_bad_filters(services):
    with pytest.raises(ValidationError) as exc:
        services.projects.search_projects(schemas.ProjectSearchFilters(min_rating=7))
    assert exc.value.field == "min_rating"
    with pytest.raises(ValidationError):
        services.projects.search_projects(schemas.ProjectSearchFilters(max_time_to_build=-1))
    with pytest.raises(ValidationError):
        services.projects.search_projects(schemas.ProjectSearchFilters(offset=-1))


def test_search_by_title(services, make_user, make_project):
    owner = make_user()
    table = make_project(owner, title="Walnut coffee table")
    make_project(owner, title="Pine shelf")
    assert [p.id for p in services.projects.search_by_title("coffee")] == [table.id]
    with pytest.raises(ValidationError) as exc:
        services.projects.search_by_title("   ")
    assert exc.value.field == "q"


def test_discovery_lists(services, make_user, make_project):
    owner = make_user()
    raters = [make_user() for _ in range(3)]
    unrated = make_project(owner, title="Unrated box")
    popular = make_project(owner, title="Two ratings")
    top = make_project(owner, title="Three ratings")
    for rater, value in zip(raters[:2], (5, 5)):
        services.ratings.create_rating(popular.id, schemas.RatingCreate(value=value), rater.id)
    for rater, value in zip(raters, (4, 4, 5)):
        services.ratings.create_rating(top.id, schemas.RatingCreate(value=value), rater.id)

    assert [p.id for p in services.projects.get_popular_projects()] == [popular.id, top.id]
    assert [p.id for p in services.projects.get_top_rated_projects()] == [top.id]
    recent = [p.id for p in services.projects.get_recent_projects()]
    assert set(recent) == {unrated.id, popular.id, top.id}
    assert recent[0] == top.id
    assert len(services.projects.list_projects(limit=1)) == 1
    assert {p.id for p in services.projects.get_projects_by_owner(owner.id)} == set(recent)


def test_title_search_treats_wildcards_literally(services, make_user, make_project):
    owner = make_user()
    solid = make_project(owner, title="100% oak bench")
    make_project(owner, title="Pine shelf")
    make_project(owner, title="Cedar chest")

    assert [p.id for p in services.projects.search_by_title("%")] == [solid.id]
    assert services.projects.search_by_title("_") == []
    found = services.projects.search_projects(schemas.ProjectSearchFilters(q="%"))
    assert [p.id for p in found] == [solid.id]
