
from collections import deque
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple


class InvalidKeyType(TypeError):
    """Raised when a key cannot be ordered against the keys already stored."""

    def __init__(self, key, other):
        super().__init__(
            f"key {key!r} ({type(key).__name__}) is not comparable "
            f"with stored key {other!r} ({type(other).__name__})"
        )
        self.key = key
        self.other = other


class DuplicateKeyError(KeyError):
    """Raised by insert() under DuplicatePolicy.REJECT."""


class DuplicatePolicy(Enum):
    IGNORE = "ignore"
    OVERWRITE = "overwrite"
    REJECT = "reject"
    MERGE = "merge"


# ------------------ Tree ------------------
class BinarySearchTree:
    """Unbalanced binary search tree of exclusively owned nodes.

    Every walk is an explicit loop, so a degenerate (sorted-insert) tree of
    any height is handled without touching the recursion limit.
    """

    class _Node:
        """A key/value pair plus its two owned children."""
        __slots__ = '_key', '_value', '_left', '_right'

        def __init__(self, key, value):
            self._key = key
            self._value = value
            self._left = None
            self._right = None

        def get_key(self): return self._key
        def get_value(self): return self._value
        def set_value(self, value): self._value = value

        def __repr__(self):
            return f"({self._key!r}, {self._value!r})"

    def __init__(self):
        self._root = None
        self._size = 0

    def __len__(self) -> int: return self._size

    @staticmethod
    def _compare(k: Any, node_key: Any) -> int:
        """Three-way comparison of k against a stored key: -1, 0 or 1."""
        try:
            if k < node_key:
                return -1
            if k > node_key:
                return 1
        except TypeError:
            raise InvalidKeyType(k, node_key) from None
        return 0

    def find(self, k: Any):
        """Return the node holding key k, or None."""
        walk = self._root
        while walk is not None:
            comp = self._compare(k, walk._key)
            if comp == 0:
                return walk
            walk = walk._left if comp < 0 else walk._right
        return None

    def find_or_attach(self, k: Any, v: Any) -> Tuple[Any, bool]:
        """Return (node, created): the node with key k, attaching a new one if absent."""
        if self._root is None:
            self._root = self._Node(k, v)
            self._size = 1
            return self._root, True

        walk = self._root
        while True:
            comp = self._compare(k, walk._key)
            if comp == 0:
                return walk, False
            if comp < 0:
                if walk._left is None:
                    walk._left = self._Node(k, v)
                    self._size += 1
                    return walk._left, True
                walk = walk._left
            else:
                if walk._right is None:
                    walk._right = self._Node(k, v)
                    self._size += 1
                    return walk._right, True
                walk = walk._right

    def inorder(self) -> Iterator[Any]:
        """Generate nodes in ascending key order."""
        stack = []
        walk = self._root
        while stack or walk is not None:
            while walk is not None:
                stack.append(walk)
                walk = walk._left
            walk = stack.pop()
            yield walk
            walk = walk._right

    def inorder_from(self, k: Any) -> Iterator[Any]:
        """Generate nodes with key >= k in ascending order."""
        stack = []
        walk = self._root
        # Seed the stack with the ancestors whose keys are >= k.
        while walk is not None:
            if self._compare(k, walk._key) <= 0:
                stack.append(walk)
                walk = walk._left
            else:
                walk = walk._right
        while stack:
            walk = stack.pop()
            yield walk
            walk = walk._right
            while walk is not None:
                stack.append(walk)
                walk = walk._left

    def first(self):
        walk = self._root
        if walk is None:
            return None
        while walk._left is not None:
            walk = walk._left
        return walk

    def last(self):
        walk = self._root
        if walk is None:
            return None
        while walk._right is not None:
            walk = walk._right
        return walk

    def height(self) -> int:
        """Return the number of nodes on the longest root-to-leaf path."""
        if self._root is None:
            return 0
        level = deque([self._root])
        depth = 0
        while level:
            depth += 1
            for _ in range(len(level)):
                node = level.popleft()
                if node._left is not None:
                    level.append(node._left)
                if node._right is not None:
                    level.append(node._right)
        return depth

    def clear(self) -> None:
        """Unlink every node, one at a time."""
        stack = [self._root] if self._root is not None else []
        self._root = None
        self._size = 0
        while stack:
            node = stack.pop()
            if node._left is not None:
                stack.append(node._left)
            if node._right is not None:
                stack.append(node._right)
            node._left = node._right = None


# ------------------ Map ------------------
class OrderedMap(Mapping):
    """Map implementation using an unbalanced Binary Search Tree.

    Keys must share a total order. A duplicate insert follows the map's
    DuplicatePolicy; the default drops it silently, so the first value
    stored under a key wins:

    >>> m = OrderedMap()
    >>> m.insert(5, 'x')
    >>> m.insert(5, 'y')
    >>> m.get(5)
    'x'
    >>> m.insert(1, 'a')
    >>> m
    OrderedMap({1: 'a', 5: 'x'})
    """

    def __init__(self, items: Optional[Iterable[Tuple[Any, Any]]] = None,
                 policy: DuplicatePolicy = DuplicatePolicy.IGNORE,
                 merge: Optional[Callable[[Any, Any], Any]] = None):
        if not isinstance(policy, DuplicatePolicy):
            raise ValueError(f"unknown duplicate policy: {policy!r}")
        if policy is DuplicatePolicy.MERGE and merge is None:
            raise ValueError("DuplicatePolicy.MERGE requires a merge function")
        self._tree = BinarySearchTree()
        self._policy = policy
        self._merge = merge

        if items is not None:
            for k, v in items:
                self.insert(k, v)

    # ------------------ Core operations ------------------
    def insert(self, k: Any, v: Any) -> None:
        """Insert (k, v); a duplicate key is handled by the map's policy."""
        node, created = self._tree.find_or_attach(k, v)
        if created or self._policy is DuplicatePolicy.IGNORE:
            return
        if self._policy is DuplicatePolicy.OVERWRITE:
            node.set_value(v)
        elif self._policy is DuplicatePolicy.MERGE:
            node.set_value(self._merge(node.get_value(), v))
        else:
            raise DuplicateKeyError(k)

    def get(self, k: Any, default: Any = None) -> Any:
        """Return the value stored under key k, or default."""
        node = self._tree.find(k)
        if node is None:
            return default
        return node.get_value()

    def put(self, k: Any, v: Any) -> Optional[Any]:
        """Insert or replace entry (k, v) and return old value, or None."""
        node, created = self._tree.find_or_attach(k, v)
        if created:
            return None
        old_value = node.get_value()
        node.set_value(v)
        return old_value

    # ------------------ Mapping protocol ------------------
    def __getitem__(self, k: Any) -> Any:
        node = self._tree.find(k)
        if node is None:
            raise KeyError(k)
        return node.get_value()

    def __contains__(self, k: Any) -> bool:
        return self._tree.find(k) is not None

    def __len__(self) -> int:
        return len(self._tree)

    def __iter__(self) -> Iterator[Any]:
        """Generate an iteration of the map's keys in order."""
        for node in self._tree.inorder():
            yield node.get_key()

    # keys(), values() and items() are one-shot generators, not views.
    def keys(self) -> Iterator[Any]:
        return iter(self)

    def values(self) -> Iterator[Any]:
        """Generate an iteration of the map's values in key order."""
        for node in self._tree.inorder():
            yield node.get_value()

    def items(self) -> Iterator[Tuple[Any, Any]]:
        for node in self._tree.inorder():
            yield node.get_key(), node.get_value()

    def __eq__(self, other):
        if isinstance(other, OrderedMap):
            # Compare in key order; keys need not be hashable.
            return len(self) == len(other) and list(self.items()) == list(other.items())
        return super().__eq__(other)

    # ------------------ Ordered queries ------------------
    def first(self) -> Optional[Tuple[Any, Any]]:
        node = self._tree.first()
        return None if node is None else (node.get_key(), node.get_value())

    def last(self) -> Optional[Tuple[Any, Any]]:
        node = self._tree.last()
        return None if node is None else (node.get_key(), node.get_value())

    def sub_map(self, k1: Any, k2: Any = None) -> Iterator[Tuple[Any, Any]]:
        """Generate (key, value) for keys k such that k1 <= k < k2.

        With k2 of None the range is open-ended.
        """
        for node in self._tree.inorder_from(k1):
            if k2 is not None and BinarySearchTree._compare(k2, node.get_key()) <= 0:
                break
            yield node.get_key(), node.get_value()

    def height(self) -> int:
        return self._tree.height()

    def clear(self) -> None:
        self._tree.clear()

    def __repr__(self) -> str:
        content = ', '.join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}({{{content}}})"
