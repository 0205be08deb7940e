##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Module for project-wide utility functions.
"""

import logging
import sys
from copy import deepcopy
from importlib import metadata
from types import SimpleNamespace
from typing import Dict, Iterable, List, Union

import yaml
from tabulate import tabulate


LOG = logging.getLogger(__name__)

SCOPE_PATH_SEPARATOR = "/"


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Each key in the dictionary becomes an attribute of a SimpleNamespace,
    allowing for attribute-style access to the data.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """

    def recurse(dic):
        if not isinstance(dic, dict):
            return dic
        for key, val in list(dic.items()):
            dic[key] = recurse(val)
        return SimpleNamespace(**dic)

    if not isinstance(dic, dict):
        raise TypeError(f"{dic} is not a dict")

    new_dic = deepcopy(dic)
    return recurse(new_dic)


def dict_deep_merge(dict_a: Dict, dict_b: Dict, path: List[str] = None):
    """
    Recursively merges `dict_b` into `dict_a` without overwriting values
    that already exist in `dict_a`.

    Nested dictionaries are merged instead of replaced. When both dictionaries
    hold a different leaf value for the same key, the value in `dict_a` is kept.

    Args:
        dict_a: The dictionary that will be merged into.
        dict_b: The dictionary to merge into `dict_a`.
        path: The current path in the dictionary tree, used for logging during recursion.
    """
    msgs = [
        f"{name} '{actual_dict}' is not a dict"
        for name, actual_dict in [("dict_a", dict_a), ("dict_b", dict_b)]
        if not isinstance(actual_dict, dict)
    ]
    if len(msgs) > 0:
        LOG.warning(f"Problem with dict_deep_merge: {', '.join(msgs)}. Ignoring this merge call.")
        return

    if path is None:
        path = []
    for key in dict_b:
        if key in dict_a:
            if isinstance(dict_a[key], dict) and isinstance(dict_b[key], dict):
                dict_deep_merge(dict_a[key], dict_b[key], path=path + [str(key)])
            elif dict_a[key] != dict_b[key]:
                LOG.debug(f"Keeping configured value at {'.'.join(path + [str(key)])}.")
        else:
            dict_a[key] = deepcopy(dict_b[key])


def split_scope_path(path: Union[str, Iterable[str], None]) -> List[str]:
    """
    Split a scope path into its individual segments.

    Empty segments created by leading, trailing, or repeated separators are dropped,
    so `"/a//b/"` and `["a", "b"]` both produce `["a", "b"]`.

    Args:
        path: Either a path string such as `"root/scope1/scope2"`, an iterable of
            segments (which may themselves contain separators), or None for the root.

    Returns:
        The list of non-empty path segments.
    """
    if path is None:
        return []
    if isinstance(path, str):
        path = [path]

    segments = []
    for part in path:
        segments.extend(segment for segment in part.split(SCOPE_PATH_SEPARATOR) if segment)
    return segments


def join_scope_path(segments: Iterable[str]) -> str:
    """
    Join scope path segments into a single path string.

    Args:
        segments: The path segments to join.

    Returns:
        The segments joined by the scope path separator.
    """
    return SCOPE_PATH_SEPARATOR.join(segments)


def get_package_versions(package_list: List[str]) -> str:
    """
    Generate a formatted table of installed package versions and their locations.

    Packages that aren't installed are reported as "Not installed". The Python
    version and its executable location are listed at the top of the table.

    Args:
        package_list: A list of package names to check for installed versions.

    Returns:
        A formatted string representing a table of package names, their versions,
            and installation locations.
    """
    table = []
    for package in package_list:
        try:
            distribution = metadata.distribution(package)
            table.append([package, distribution.version, str(distribution.locate_file(""))])
        except metadata.PackageNotFoundError:
            table.append([package, "Not installed", "N/A"])

    table.insert(0, ["python", sys.version.split()[0], sys.executable])
    table_str = tabulate(table, headers=["Package", "Version", "Location"], tablefmt="simple")
    return f"Python Packages\n\n{table_str}\n"
