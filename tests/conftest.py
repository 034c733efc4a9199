"""
Shared test fixtures.

Sets up an isolated SQLite test database so tests never touch
the real database. Tables are created before each test and
dropped after it, so every test starts from an empty ledger.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from gl_posting.main import app
from gl_posting.models.base import Base, get_db
from gl_posting.models.enums import AccountType, NormalBalance
from gl_posting.schemas.bank_account import BankAccountCreate
from gl_posting.schemas.coa import COAAccountCreate
from gl_posting.services.bank_account_service import BankAccountService
from gl_posting.services.coa_service import COAService


# Use SQLite for tests: no external database needed.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test gets this automatically.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    We override the get_db dependency so the FastAPI app
    uses our test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_account(service, code, account_type, parent_id=None, is_leaf=True,
                 normal_balance=NormalBalance.DEBIT, **kwargs):
    """Create a COA account and return it."""
    return service.create_account(COAAccountCreate(
        code=code,
        name=kwargs.pop("name", code),
        account_type=account_type,
        normal_balance=normal_balance,
        parent_id=parent_id,
        is_leaf=is_leaf,
        **kwargs,
    ))


@pytest.fixture
def chart(db_session):
    """
    A small chart of accounts plus INR, USD and EUR bank accounts.

    Codes match the default settings: AR is 1.1.2, AP is 2.1.1,
    FX gain and loss are FX_GAIN and FX_LOSS. INR is functional.
    """
    coa = COAService(db_session)
    banks = BankAccountService(db_session)

    assets = make_account(coa, "1", AccountType.ASSET, is_leaf=False, name="Assets")
    current = make_account(
        coa, "1.1", AccountType.ASSET, parent_id=assets.id, is_leaf=False,
        name="Current assets",
    )
    bank_inr_gl = make_account(coa, "1.1.1", AccountType.ASSET, parent_id=current.id)
    ar = make_account(coa, "1.1.2", AccountType.ASSET, parent_id=current.id, name="AR")
    bank_usd_gl = make_account(coa, "1.1.3", AccountType.ASSET, parent_id=current.id)
    bank_eur_gl = make_account(coa, "1.1.4", AccountType.ASSET, parent_id=current.id)

    liabilities = make_account(
        coa, "2", AccountType.LIABILITY, is_leaf=False,
        normal_balance=NormalBalance.CREDIT, name="Liabilities",
    )
    current_liabilities = make_account(
        coa, "2.1", AccountType.LIABILITY, parent_id=liabilities.id,
        is_leaf=False, normal_balance=NormalBalance.CREDIT,
    )
    ap = make_account(
        coa, "2.1.1", AccountType.LIABILITY, parent_id=current_liabilities.id,
        normal_balance=NormalBalance.CREDIT, name="AP",
    )

    fx_gain = make_account(
        coa, "FX_GAIN", AccountType.REVENUE, normal_balance=NormalBalance.CREDIT
    )
    fx_loss = make_account(coa, "FX_LOSS", AccountType.EXPENSE)

    bank_inr = banks.create_bank_account(BankAccountCreate(
        code="HDFC-INR", name="HDFC Current", currency="INR",
        ledger_account_id=bank_inr_gl.id,
    ))
    bank_usd = banks.create_bank_account(BankAccountCreate(
        code="CITI-USD", name="Citi USD", currency="USD",
        ledger_account_id=bank_usd_gl.id,
    ))
    bank_eur = banks.create_bank_account(BankAccountCreate(
        code="DB-EUR", name="Deutsche EUR", currency="EUR",
        ledger_account_id=bank_eur_gl.id,
    ))
    db_session.commit()

    return {
        "assets": assets,
        "current": current,
        "ar": ar,
        "ap": ap,
        "fx_gain": fx_gain,
        "fx_loss": fx_loss,
        "bank_inr_gl": bank_inr_gl,
        "bank_usd_gl": bank_usd_gl,
        "bank_eur_gl": bank_eur_gl,
        "bank_inr": bank_inr,
        "bank_usd": bank_usd,
        "bank_eur": bank_eur,
    }


@pytest.fixture
def new_account(db_session):
    """Factory fixture: new_account(code, account_type, **options)."""
    service = COAService(db_session)

    def _new_account(code, account_type, **kwargs):
        return make_account(service, code, account_type, **kwargs)

    return _new_account
