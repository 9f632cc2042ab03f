from unittest.mock import patch

import pytest

from app_pos.models import (
    Category,
    ConflictingDataError,
    DataNotFoundError,
    InternalError,
    NoUpdatedDataError,
)


@pytest.fixture
def service(container):
    return container.category_service


def test_create_caches_entity_and_invalidates_pages(service, cache):
    service.list_categories(1, 10)
    assert 'categories:1-10' in cache.keys()

    created = service.create_category(Category(name='Bebidas'))

    assert f'category:{created.id}' in cache.keys()
    assert 'categories:1-10' not in cache.keys()


def test_create_duplicate_name(service):
    service.create_category(Category(name='Bebidas'))
    with pytest.raises(ConflictingDataError):
        service.create_category(Category(name='Bebidas'))


def test_get_is_served_from_cache(service, container):
    created = service.create_category(Category(name='Bebidas'))
    repo = container.category_repo

    with patch.object(repo, 'get_category_by_id', wraps=repo.get_category_by_id) as spy:
        assert service.get_category(created.id) == created
        assert spy.call_count == 0


def test_get_missing(service):
    with pytest.raises(DataNotFoundError):
        service.get_category(404)


def test_list_second_call_hits_cache(service, container):
    service.create_category(Category(name='A'))
    repo = container.category_repo

    with patch.object(repo, 'list_categories', wraps=repo.list_categories) as spy:
        first = service.list_categories(1, 10)
        second = service.list_categories(1, 10)

    assert first == second
    assert spy.call_count == 1


def test_update_identical_name_is_no_update(service, container):
    created = service.create_category(Category(name='Bebidas'))
    repo = container.category_repo

    with patch.object(repo, 'update_category', wraps=repo.update_category) as spy:
        with pytest.raises(NoUpdatedDataError):
            service.update_category(created.id, {'name': 'Bebidas'})
        with pytest.raises(NoUpdatedDataError):
            service.update_category(created.id, {'name': ''})

    assert spy.call_count == 0


def test_update_refreshes_cache(service, cache):
    created = service.create_category(Category(name='Bebidas'))
    service.list_categories(1, 10)

    updated = service.update_category(created.id, {'name': 'Snacks'})

    assert updated.name == 'Snacks'
    assert service.get_category(created.id).name == 'Snacks'
    assert 'categories:1-10' not in cache.keys()


def test_update_missing(service):
    with pytest.raises(DataNotFoundError):
        service.update_category(404, {'name': 'X'})


def test_delete(service, cache):
    created = service.create_category(Category(name='Bebidas'))
    service.delete_category(created.id)

    assert f'category:{created.id}' not in cache.keys()
    with pytest.raises(DataNotFoundError):
        service.get_category(created.id)
    with pytest.raises(DataNotFoundError):
        service.delete_category(created.id)


def test_unexpected_storage_failure_is_internal(service, container):
    with patch.object(container.category_repo, 'list_categories', side_effect=OSError('disco')):
        with pytest.raises(InternalError):
            service.list_categories(1, 10)


def test_cache_failure_is_internal(service, cache):
    with patch.object(cache, 'get', side_effect=RuntimeError('caída')):
        with pytest.raises(InternalError):
            service.get_category(1)
