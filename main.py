import time
from bstmap.generator import generate
from bstmap.storage import PhoneBook

SAMPLE_SIZE = 10_000


def run_load_and_smoke_test(ordered: bool = False) -> PhoneBook:
    label = "sorted" if ordered else "random"
    print(f"--- PhoneBook load + smoke test ({label} insertion order) ---")
    book = PhoneBook()

    start_time = time.time()
    book.load_entries(generate(SAMPLE_SIZE, seed=0, ordered=ordered))
    end_time = time.time()

    print(f"Loaded {len(book)} entries in {end_time - start_time:.2f}s")

    names = list(book.name_index)
    if not names:
        print("No entries loaded.")
        return book

    mid_name = names[len(names) // 2]
    record = book.lookup(mid_name)
    print(f"Sample GET {mid_name!r}: phone={record.get('phone')}")

    prefix = mid_name[:3]
    matches = list(book.prefix_search(prefix))
    print(f"Prefix {prefix!r} -> {len(matches)} entries")
    for rec in matches[:3]:
        print(f"  - {rec.get('name')}: {rec.get('phone')}")
    if len(matches) > 3:
        print("  ...")
    return book


if __name__ == "__main__":
    run_load_and_smoke_test()
    run_load_and_smoke_test(ordered=True)
