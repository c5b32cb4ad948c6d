import json
import pathlib

CONFIG_DIR = pathlib.Path(__file__).resolve().parent.parent / "config"


def read_abi(contract: str):
    with open(CONFIG_DIR / f"{contract.lower()}_abi.json") as f:
        data = json.load(f)
        return data
