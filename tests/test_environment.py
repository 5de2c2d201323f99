import os

import pytest
from web3 import Web3

from config.chains import ChainId, find_chain
from config.environment import load_config, load_env_files
from config.settings import DEFAULT_HOST, DEFAULT_PORT
from core.errors import ConfigurationError

ADDRESS = "0x" + "ab" * 20


def base_env(**overrides):
    env = {
        "BASE_SEPOLIA_RPC_URL": "https://sepolia.base.example",
        "BASE_SEPOLIA_AGENT_DELEGATIONS_RESOLVER_ADDRESS": ADDRESS,
    }
    env.update(overrides)
    return {k: v for k, v in env.items() if v is not None}


def test_defaults():
    config = load_config(base_env())

    assert config.chain.chain_id is ChainId.BASE_SEPOLIA
    assert config.rpc_urls == ("https://sepolia.base.example",)
    assert config.resolver_address == Web3.to_checksum_address(ADDRESS)
    assert config.host == DEFAULT_HOST
    assert config.port == DEFAULT_PORT
    assert config.log_level == "INFO"
    assert config.access_log is False


def test_multiple_rpc_urls():
    config = load_config(base_env(BASE_SEPOLIA_RPC_URL="https://a.example, https://b.example,"))

    assert config.rpc_urls == ("https://a.example", "https://b.example")


def test_fallback_resolver_address():
    env = base_env(
        BASE_SEPOLIA_AGENT_DELEGATIONS_RESOLVER_ADDRESS=None,
        AGENT_DELEGATIONS_RESOLVER_ADDRESS=ADDRESS,
    )

    assert load_config(env).resolver_address.lower() == ADDRESS


def test_chain_selection():
    env = {
        "GATEWAY_CHAIN": "base",
        "BASE_RPC_URL": "https://base.example",
        "AGENT_DELEGATIONS_RESOLVER_ADDRESS": ADDRESS,
        "PORT": "9000",
        "HOST": "127.0.0.1",
        "LOG_LEVEL": "debug",
        "ACCESS_LOG": "true",
    }

    config = load_config(env)

    assert config.chain.chain_id is ChainId.BASE
    assert config.port == 9000
    assert config.host == "127.0.0.1"
    assert config.log_level == "DEBUG"
    assert config.access_log is True


@pytest.mark.parametrize(
    "env, message",
    [
        (base_env(BASE_SEPOLIA_RPC_URL=None), "BASE_SEPOLIA_RPC_URL is required"),
        (base_env(BASE_SEPOLIA_RPC_URL=" , "), "BASE_SEPOLIA_RPC_URL is required"),
        (base_env(BASE_SEPOLIA_AGENT_DELEGATIONS_RESOLVER_ADDRESS=None), "AGENT_DELEGATIONS_RESOLVER_ADDRESS"),
        (base_env(BASE_SEPOLIA_AGENT_DELEGATIONS_RESOLVER_ADDRESS="0x1234"), "Invalid resolver address"),
        (base_env(PORT="http"), "PORT must be an integer"),
        (base_env(PORT="70000"), "PORT out of range"),
        (base_env(GATEWAY_CHAIN="solana"), "Unknown GATEWAY_CHAIN"),
    ],
)
def test_invalid_configuration(env, message):
    with pytest.raises(ConfigurationError, match=message):
        load_config(env)


def test_find_chain():
    assert find_chain("BASE_SEPOLIA").chain_id is ChainId.BASE_SEPOLIA
    assert find_chain("8453").chain_id is ChainId.BASE
    assert find_chain("unknown") is None


def test_env_files_do_not_override(tmp_path, monkeypatch):
    (tmp_path / ".env.local").write_text("GW_TEST_SHARED=local\n")
    (tmp_path / ".env").write_text("GW_TEST_SHARED=env\nGW_TEST_ONLY_ENV='quoted'\nGW_TEST_PRESET=file\n")
    monkeypatch.chdir(tmp_path)
    for name in ("GW_TEST_SHARED", "GW_TEST_ONLY_ENV"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.setenv("GW_TEST_PRESET", "process")

    load_env_files()

    assert os.environ["GW_TEST_SHARED"] == "local"
    assert os.environ["GW_TEST_ONLY_ENV"] == "quoted"
    assert os.environ["GW_TEST_PRESET"] == "process"
