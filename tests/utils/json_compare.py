from typing import Dict, Iterable, Set


def exclude_keys(data: Dict, keys: Set[str]) -> Dict:
    return {k: v for k, v in data.items() if k not in keys}


def pluck(items: Iterable[Dict], key: str) -> list:
    """Values of one key across a list of JSON objects, in order"""
    return [item[key] for item in items]
