
from typing import Any, Dict, Iterable, Iterator, List, Optional
from bstmap.indexing import OrderedMap  # Import our BST map implementation

class PhoneBook:
    # ------------------ Initialization ------------------

    def __init__(self):
        """Initializes the phone book with an empty record store and BST indexes."""
        self.data_store: List[Dict[str, Any]] = []

        # First number registered under a name wins; later inserts are dropped.
        self.name_index: OrderedMap = OrderedMap()
        self.phone_index: OrderedMap = OrderedMap()

    # ------------------ Accessors ------------------
    def __len__(self) -> int:
        """Return the total number of entries in the phone book."""
        return len(self.data_store)

    # ------------------ Index helpers ------------------
    def _add_to_phone_index(self, phone: str, record_id: int) -> None:
        """Append record_id to the bucket for phone, creating the bucket if needed."""
        bucket = self.phone_index.get(phone)
        if bucket is None:
            self.phone_index.insert(phone, [record_id])
        else:
            bucket.append(record_id)

    def _remove_from_phone_index(self, phone: str, record_id: int) -> None:
        """Remove record_id from the bucket for phone; the key itself stays."""
        bucket = self.phone_index.get(phone)
        if bucket is None:
            return
        try:
            bucket.remove(record_id)
        except ValueError:
            return

    def _records(self, record_ids: Iterable[int]) -> List[Dict[str, Any]]:
        return [self.data_store[rid] for rid in record_ids if 0 <= rid < len(self.data_store)]

    # ------------------ Core mutations ------------------
    def add_entry(self, name: str, phone: str, /, **extra: Any) -> Optional[int]:
        """Add an entry and index it. Returns the new record ID, or None for a known name."""
        if not name:
            raise ValueError("Entry must include a 'name'")
        if not phone:
            raise ValueError("Entry must include a 'phone'")

        record_id = len(self.data_store)
        size_before = len(self.name_index)
        self.name_index.insert(name, record_id)
        if len(self.name_index) == size_before:
            return None

        record = dict(extra, name=name, phone=phone)
        self.data_store.append(record)
        self._add_to_phone_index(phone, record_id)
        return record_id

    def update_phone(self, name: str, phone: str) -> bool:
        """Point an existing name at a new number; reindex the number."""
        if not phone:
            raise ValueError("Entry must include a 'phone'")
        record_id = self.name_index.get(name)
        if record_id is None:
            return False

        record = self.data_store[record_id]
        old_phone = record["phone"]
        if old_phone != phone:
            record["phone"] = phone
            self._remove_from_phone_index(old_phone, record_id)
            self._add_to_phone_index(phone, record_id)
        return True

    # ------------------ Data ingestion ------------------
    def load_entries(self, rows: Iterable[Dict[str, Any]]) -> int:
        """
        Adds every row holding a 'name' and 'phone'. Rows missing either
        are skipped. Returns how many new entries were stored.
        """
        total_rows = 0
        added = 0
        skipped = 0

        for row in rows:
            total_rows += 1
            fields = dict(row)
            name = str(fields.pop("name", "") or "").strip()
            phone = str(fields.pop("phone", "") or "").strip()
            if not name or not phone:
                skipped += 1
                continue

            if self.add_entry(name, phone, **fields) is not None:
                added += 1

            if total_rows % 100000 == 0:
                print(f"Progress: {total_rows:,} rows loaded...")

        print("--- Load Summary ---")
        print(f"Rows read: {total_rows:,} (added {added:,}, skipped {skipped:,}, "
              f"duplicates {total_rows - added - skipped:,})")
        print(f"Name index size: {len(self.name_index)}, height: {self.name_index.height()}")
        return added

    # ------------------ Core queries ------------------
    def lookup(self, name: str) -> Optional[Dict[str, Any]]:
        """Retrieves a single entry by searching the name index."""
        record_id = self.name_index.get(name)
        if record_id is None:
            return None
        return self.data_store[record_id]

    def lookup_number(self, phone: str) -> List[Dict[str, Any]]:
        """Return every entry currently listed under a number."""
        return self._records(self.phone_index.get(phone, []))

    def names_between(self, start: str, stop: Optional[str] = None) -> Iterator[Dict[str, Any]]:
        """
        Yields entries for names n such that start <= n < stop, alphabetically.
        """
        for _, record_id in self.name_index.sub_map(start, stop):
            yield self.data_store[record_id]

    def prefix_search(self, prefix: str) -> Iterator[Dict[str, Any]]:
        """Yields entries whose name starts with prefix, alphabetically."""
        for name, record_id in self.name_index.sub_map(prefix):
            if not name.startswith(prefix):
                break
            yield self.data_store[record_id]

    def entries(self) -> Iterator[Dict[str, Any]]:
        """Yields every entry in alphabetical order of name."""
        for record_id in self.name_index.values():
            yield self.data_store[record_id]
