"""
Dictionary datasets

The bundled default corpus plus a JSON loader for externally supplied ones.
Accepted JSON shapes: a list of {"term"|"word", "definition"} objects or
[term, definition] pairs, optionally wrapped as {"entries": [...]}.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Tuple, Union

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_ENTRIES: Tuple[Tuple[str, str], ...] = (
    ("Bank", "An institution for receiving, lending, exchanging, and safeguarding money."),
    ("Bank", "The land beside a body of water, such as a river."),
    ("Trace-based", "A method of optimization that uses execution traces to identify hot code paths."),
    ("Just-in-Time", "A method of executing computer code that involves compilation during execution rather than prior to execution."),
    ("Specialization", "The process of tailoring code for specific types or values to improve performance."),
    ("Dynamic", "Characterized by constant change, activity, or progress; in computing, referring to processes that occur during execution."),
    ("Compiler", "A program that translates source code into machine code or bytecode."),
    ("Interpreter", "A program that executes instructions directly without prior compilation."),
    ("Heuristic", "A technique designed for solving a problem more quickly when classic methods are too slow."),
    ("Deterministic", "A process that, given a particular input, will always produce the same output."),
    ("Optimization", "The action of making the best or most effective use of a resource."),
    ("Virtual Machine", "An emulation of a computer system providing the functionality of a physical computer."),
    ("Bytecode", "A form of instruction set designed for efficient execution by a software interpreter."),
    ("Type", "A category for a piece of data that determines what operations can be performed on it."),
    ("Pointer", "A variable that stores the memory address of another value."),
    ("Allocation", "The process of reserving a block of memory for data."),
    ("Garbage Collection", "Automatic memory management that reclaims space used by objects no longer in use."),
    ("Latency", "The time interval between a cause and its effect in a system."),
    ("Throughput", "The amount of data or processes handled within a specific period."),
)


def default_entries() -> List[Tuple[str, str]]:
    return list(DEFAULT_ENTRIES)


def load_entries(path: Union[str, Path]) -> List[Any]:
    """Read a JSON dataset file; items are validated later by the builder"""
    dataset_path = Path(path)
    try:
        with open(dataset_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise InvalidInputError(f"Dataset not found: {dataset_path}")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidInputError(f"Cannot read dataset {dataset_path}: {e}")
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid JSON in dataset {dataset_path}: {e}")

    if isinstance(data, dict):
        data = data.get("entries")
    if not isinstance(data, list):
        raise InvalidInputError(f"Dataset {dataset_path} must contain a list of entries")

    logger.info(f"Loaded {len(data)} dataset items from {dataset_path}")
    return data
