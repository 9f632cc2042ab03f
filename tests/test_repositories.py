import json
from decimal import Decimal

import pytest

from app_pos.models import (
    Category,
    ConflictingDataError,
    DataNotFoundError,
    Order,
    OrderProduct,
    Payment,
    PaymentType,
    Product,
    User,
    UserRole,
)
from app_pos.repositories import (
    CategoryRepository,
    OrderRepository,
    PaymentRepository,
    ProductRepository,
    UserRepository,
)


@pytest.fixture
def data_dir(tmp_path):
    return str(tmp_path)


def test_files_are_created_on_init(tmp_path):
    CategoryRepository(str(tmp_path / 'nested'))
    with open(tmp_path / 'nested' / 'categories.json', encoding='utf-8') as f:
        assert json.load(f) == {'seq': 0, 'records': {}}


def test_category_crud(data_dir):
    repo = CategoryRepository(data_dir)
    a = repo.create_category(Category(name='Bebidas'))
    b = repo.create_category(Category(name='Snacks'))
    assert (a.id, b.id) == (1, 2)
    assert a.created_at is not None

    with pytest.raises(ConflictingDataError):
        repo.create_category(Category(name='Bebidas'))

    updated = repo.update_category(a.id, {'name': 'Bebidas frías'})
    assert updated.name == 'Bebidas frías'
    assert updated.updated_at >= updated.created_at

    repo.delete_category(b.id)
    with pytest.raises(DataNotFoundError):
        repo.get_category_by_id(b.id)
    with pytest.raises(DataNotFoundError):
        repo.delete_category(b.id)


def test_ids_are_never_reused(data_dir):
    repo = CategoryRepository(data_dir)
    first = repo.create_category(Category(name='A'))
    repo.delete_category(first.id)
    assert repo.create_category(Category(name='B')).id == first.id + 1


def test_pagination_is_one_based(data_dir):
    repo = CategoryRepository(data_dir)
    for i in range(5):
        repo.create_category(Category(name=f'c{i}'))

    assert [c.name for c in repo.list_categories(1, 2)] == ['c0', 'c1']
    assert [c.name for c in repo.list_categories(3, 2)] == ['c4']
    assert repo.list_categories(4, 2) == []


def test_update_conflict_and_missing(data_dir):
    repo = PaymentRepository(data_dir)
    repo.create_payment(Payment(name='Efectivo', type=PaymentType.CASH))
    card = repo.create_payment(Payment(name='Tarjeta', type=PaymentType.EDC))

    with pytest.raises(ConflictingDataError):
        repo.update_payment(card.id, {'name': 'Efectivo'})
    with pytest.raises(DataNotFoundError):
        repo.update_payment(99, {'name': 'X'})

    wallet = repo.update_payment(card.id, {'type': PaymentType.E_WALLET})
    assert wallet.type is PaymentType.E_WALLET
    assert wallet.name == 'Tarjeta'


def test_user_by_email_and_role(data_dir):
    repo = UserRepository(data_dir)
    user = repo.create_user(User(name='Ana', email='ana@pos.test', password='h'))
    assert repo.get_user_by_email('ana@pos.test').id == user.id
    with pytest.raises(DataNotFoundError):
        repo.get_user_by_email('nadie@pos.test')
    with pytest.raises(ConflictingDataError):
        repo.create_user(User(name='Otra', email='ana@pos.test', password='h'))

    promoted = repo.update_user(user.id, {'role': UserRole.ADMIN})
    assert promoted.is_admin()


def test_product_sku_price_and_search(data_dir):
    repo = ProductRepository(data_dir)
    cafe = repo.create_product(Product(name='Café', category_id=1, stock=5, price=Decimal('10.50')))
    repo.create_product(Product(name='Té verde', category_id=2, stock=1, price=Decimal('3')))
    repo.create_product(Product(name='Café molido', category_id=2, stock=1, price=Decimal('7')))

    assert cafe.sku
    assert repo.get_product_by_id(cafe.id).price == Decimal('10.50')

    assert [p.name for p in repo.list_products('CAFÉ', None, 1, 10)] == ['Café', 'Café molido']
    assert [p.name for p in repo.list_products('', 2, 1, 10)] == ['Té verde', 'Café molido']
    assert [p.name for p in repo.list_products('café', 2, 1, 10)] == ['Café molido']


def test_product_stock_can_drop_to_zero(data_dir):
    repo = ProductRepository(data_dir)
    p = repo.create_product(Product(name='Café', category_id=1, stock=5, price=Decimal('1')))
    assert repo.update_product(p.id, {'stock': 0}).stock == 0


def test_enrichment_is_not_persisted(data_dir):
    repo = ProductRepository(data_dir)
    p = repo.create_product(Product(
        name='Café', category_id=1, stock=1, price=Decimal('1'),
        category=Category(id=1, name='Bebidas'),
    ))
    assert repo.get_product_by_id(p.id).category is None


def test_order_assigns_ids_and_receipt(data_dir):
    repo = OrderRepository(data_dir)
    order = Order(
        user_id=1, payment_id=1, total_paid=Decimal('40'), total_price=Decimal('30'),
        total_return=Decimal('10'),
        products=[
            OrderProduct(product_id=1, quantity=1, total_price=Decimal('10')),
            OrderProduct(product_id=2, quantity=2, total_price=Decimal('20')),
        ],
    )
    first = repo.create_order(order)
    second = repo.create_order(Order(
        user_id=1, payment_id=1, products=[OrderProduct(product_id=1, quantity=1)],
    ))

    assert (first.id, second.id) == (1, 2)
    assert first.receipt_code and first.receipt_code != second.receipt_code
    assert [line.id for line in first.products] == [1, 2]
    assert second.products[0].id == 3
    assert all(line.order_id == first.id for line in first.products)

    stored = repo.get_order_by_id(first.id)
    assert stored.total_return == Decimal('10')
    assert [o.id for o in repo.list_orders(1, 1)] == [1]
    with pytest.raises(DataNotFoundError):
        repo.get_order_by_id(42)


def test_corrupted_file_raises(data_dir, tmp_path):
    repo = CategoryRepository(data_dir)
    with open(tmp_path / 'categories.json', 'w', encoding='utf-8') as f:
        f.write('{roto')
    with pytest.raises(ValueError):
        repo.list_categories(1, 10)
