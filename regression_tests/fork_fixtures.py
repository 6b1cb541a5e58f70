import pytest


@pytest.fixture
def owner(accounts):
    # 0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266
    return accounts[0]


@pytest.fixture
def provider(chain):
    return chain.provider


@pytest.fixture
def tmp_root(tmp_path):
    root = tmp_path / 'flash_liquidator_test'
    root.mkdir()
    return root
