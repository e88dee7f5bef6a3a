import os
import pytest
from ctpl.PARSERS.template_parser import TemplateParser
from ctpl.UTILS.config import BUNDLED_TEMPLATE_DIR

GAMEROOM_PATH = os.path.join(BUNDLED_TEMPLATE_DIR, "gameroom.yaml")


@pytest.fixture
def gameroom_path():
    return GAMEROOM_PATH


@pytest.fixture
def gameroom_template():
    return TemplateParser().parse(GAMEROOM_PATH)


@pytest.fixture
def gameroom_args():
    return {
        "NODES": "acme-node-000,bubba-node-000",
        "SIGNER_PUB_KEY": "02a0b1c2",
        "GAMEROOM_NAME": "tic-tac-toe",
    }
