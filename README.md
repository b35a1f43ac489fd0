# minisql

The storage building blocks of a small relational database engine, in plain
Python with no dependencies outside the standard library.

## What is inside

| Module | Contents |
| --- | --- |
| `minisql.page` | `Page`, a fixed-size block of bytes with a page id, a pin count, a dirty flag and an LSN in its header |
| `minisql.bitmap_page` | `BitmapPage`, which tracks which pages of an extent are in use, and `DiskFileMetaPage`, which counts allocated pages per extent |
| `minisql.header_page` | `HeaderPage`, which maps names (under 32 bytes) to root page ids |
| `minisql.index_roots_page` | `IndexRootsPage`, which maps index ids to root page ids |
| `minisql.table_page` | `TablePage`, a slotted page of variable-length tuples, with `RowId` and `TablePageError` |
| `minisql.txn` | `Txn`, `TxnState`, `IsolationLevel`, `AbortReason` and `TxnAbortError` |
| `minisql.lock_request` | `LockMode`, `LockRequest` and `LockRequestQueue` |
| `minisql.comparator` | `basic_compare`, a three-way comparison returning -1, 0 or 1 |
| `minisql.bplus_tree_page` | `BPlusTreePage` and `IndexPageType`, the state shared by all tree nodes |
| `minisql.bplus_tree_leaf_page` | `LeafPage`, a sorted leaf node of key/row-id pairs, and `DuplicateKeyError` |
| `minisql.bplus_tree_internal_page` | `InternalPage`, a node of separator keys and child page ids |
| `minisql.expressions` | Column, constant, comparison and logic expressions with three-valued (true, false, NULL) results |

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Allocating pages from an extent:

```python
from minisql.bitmap_page import BitmapPage

bitmap = BitmapPage(4096)
first = bitmap.allocate_page()    # 0
second = bitmap.allocate_page()   # 1
bitmap.deallocate_page(first)
assert bitmap.is_page_free(first)
```

Storing tuples in a slotted page:

```python
from minisql.table_page import TablePage

page = TablePage()
page.init(0, -1)
rid = page.insert_tuple(b"hello")
assert page.get_tuple(rid) == b"hello"
page.mark_delete(rid)
page.apply_delete(rid)
```

Recording where an index's tree starts:

```python
from minisql.index_roots_page import IndexRootsPage

roots = IndexRootsPage()
roots.insert(1, 42)
assert roots.get_root_id(1) == 42
```

Evaluating a predicate against a row:

```python
from minisql.expressions import (
    ColumnValueExpression, ComparisonExpression, ConstantValueExpression, TypeId,
)

pred = ComparisonExpression(
    ColumnValueExpression(0, 0, TypeId.INT), ConstantValueExpression(5), ">"
)
assert pred.evaluate([7, "x"]) == 1
assert pred.evaluate([None, "x"]) is None
```

## How results are reported

- Lookups of a name or id that is not present (`HeaderPage.get_root_id`,
  `IndexRootsPage.get_root_id`, `LeafPage.lookup`, `TablePage.get_tuple`)
  return `None`.
- Inserting a name or index id that is already present into `HeaderPage` or
  `IndexRootsPage` returns `False`; deleting or updating a missing one also
  returns `False`. Inserting a duplicate key into a `LeafPage` raises
  `DuplicateKeyError`.
- `TablePage.insert_tuple` and `TablePage.update_tuple` return `None` when the
  page has no room; `update_tuple` raises `TablePageError` for a missing or
  deleted slot.
- `BitmapPage.allocate_page` raises `BitmapFullError` when the extent is full.

## What this package does not do

It provides pages and node types only. There is no disk manager or database
file, no buffer pool, no full B+ tree that splits and merges nodes, no lock
manager that grants or waits on locks, no catalog, and no SQL parser, planner
or executor. There is no command to run.