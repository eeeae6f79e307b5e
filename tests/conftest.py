from pathlib import Path

import pytest

from meditimer import MeditimerConfig

TEST_DATA_PATH = Path(__file__).parent / "data"
TEST_CONFIG_PATH = TEST_DATA_PATH / "config"

ENV_FILE = TEST_CONFIG_PATH / ".env"
TEST_TOML_FILE = TEST_CONFIG_PATH / "meditimer.toml"

assert ENV_FILE.exists(), f"Environment file {ENV_FILE} does not exist"
assert TEST_TOML_FILE.exists(), f"Test TOML file {TEST_TOML_FILE} does not exist"

# this wants package.nested_directories.final_file_name
# do not include the name of the fixture
pytest_plugins = ["meditimer.test_utils.fixtures"]


class TestConfig(MeditimerConfig):
    """
    A test configuration class that inherits from MeditimerConfig.
    Uses the test TOML and .env files and fast tick intervals.
    """

    __test__ = False

    model_config = MeditimerConfig.model_config.copy() | {
        "toml_file": TEST_TOML_FILE,
        "env_file": ENV_FILE,
    }

    tick_interval_seconds: float = 0.02
    fade_tick_interval_seconds: float = 0.01
    idle_tick_interval_seconds: float = 0.05
    ticker_shutdown_timeout_seconds: float = 1

    def model_post_init(self, *args):
        # override this to avoid reconfiguring logging during tests
        pass


@pytest.fixture
def test_config_class():
    """Provide the TestConfig class for tests that build their own configuration."""
    return TestConfig


@pytest.fixture
def test_config(tmp_path: Path) -> TestConfig:
    """Provide a configuration whose data and sounds directories live in a temporary directory."""
    return TestConfig(data_dir=tmp_path / "data", sounds_dir=tmp_path / "sounds")


@pytest.fixture
def env_file_path() -> Path:
    return ENV_FILE
