# analysis_pipeline

This is the core of a stage-based analysis pipeline. Each stage reads its
settings from a JSON-like mapping. The stages then work on a shared store of
named, tagged data products. For each product, the store allows either many
readers at once or a single writer.

## Installation

```
pip install .
```

To install and run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `analysis_pipeline.data_product`

`PipelineDataProduct(obj=None, name="", tags=())` wraps one object and gives it
a name and a set of string tags.

- `object` returns the wrapped object.
  - `set_object(obj)` replaces the object.
  - If `obj` is `None`, `set_object` only logs a warning and changes nothing.
- `class_name` is the class name of the wrapped object. It is `""` when no
  object is set.
- `get_member(name)` returns `(value, type name)` for one public member, such as
  `(0.42, "float")`. If the member is missing, it returns `(None, "")`.
  - For dataclasses, the members are the dataclass fields.
  - For other objects, the members are the public instance attributes.
- `all_members()` returns the same information for every public member, sorted
  by name.
- `to_json()` returns a JSON-compatible dict.
  - The dict has a `"_typename"` entry.
  - The rest comes from the object's `to_dict()` if it has one, and from its
    public members otherwise.
  - It returns `None` if there is no object or if the object cannot be
    serialised.
- Tags are handled by four members:
  - `add_tag(tag)`
  - `remove_tag(tag)`
  - `has_tag(tag)`
  - `tags`, a frozen snapshot of the current tags

### `analysis_pipeline.product_manager`

`PipelineDataProductManager` is the thread-safe store.

- `add_or_update(name, product)` stores a product and sets its name.
  - `add_or_update_multiple(...)` does the same for several products. It takes a
    mapping or `(name, product)` pairs.
  - Both methods skip `None` products.
- Removal:
  - `remove(name)` and `remove_multiple(names)` delete products. Names that are
    not present are ignored.
  - `clear()` deletes everything.
- Queries:
  - `names()`
  - `has_product(name)`
  - `has_products(names)`
  - `existing_products(names)`
- `extract_product(name)` removes a product and returns it. It returns `None` if
  the product is absent.
- `serialize_all()` maps every name to that product's `to_json()`.
- Tag selection:
  - `all_tags()`
  - `names_with_tag(tag)`
  - `names_with_any_tags(tags)`
  - `names_with_all_tags(tags)`
  - `names_with_exact_tags(tags)`
  - `names_with_no_tags()`
- Tag-based removal:
  - `remove_by_tag(tag)`
  - `remove_excluding_tag(tag)`
  - `remove_by_tags(tags)` removes products that carry any of the tags.
  - `remove_excluding_tags(tags)` removes products that carry none of them.
- Checkouts:
  - `checkout_read(name)` and `checkout_write(name)` return a
    `PipelineDataProductLock` that holds a shared or an exclusive lock.
  - `checkout_read_multiple(names)` and `checkout_write_multiple(names)` lock
    several products in sorted name order.
  - `checkout_write_multiple` raises `ValueError` if a name appears twice.
  - Any checkout of a missing name raises `ProductNotFoundError`, which is a
    `LookupError`.

### `analysis_pipeline.product_lock`

`PipelineDataProductLock` is the handle a checkout returns.

- `product` is the checked-out product.
- `mode` is a `LockMode`: `READ` or `WRITE`.
- `valid` tells whether the handle still refers to a product.
- `release()` releases the lock. The handle is also a context manager.

`SharedLock` is the lock underneath. It allows many readers or one writer, and
a waiting writer blocks new readers. It has these methods:

- `acquire_read()` and `release_read()`
- `acquire_write()` and `release_write()`
- `acquire(mode)` and `release(mode)`

### `analysis_pipeline.input_bundle`

`InputBundle` is a key/value container for input from outside a stage.

- Storing and reading:
  - `set(key, value)` stores a value.
  - `get(key, expected_type=None)` returns it. It raises `KeyError` for a
    missing key and `TypeError` when the type does not match.
- Checking:
  - `has(key, expected_type)` tells whether the key holds a value of that type.
  - `key in bundle` tells whether the key exists.
  - `len(bundle)` is the number of entries.
- Managing entries:
  - `keys()` lists the keys.
  - `remove(key)` deletes one entry.
  - `clear()` deletes all entries.
- `describe()` returns one `key -> type name` line per entry.

### `analysis_pipeline.objects`

- `Parameter(name, value)` is a dataclass that holds one named number.
- `Histogram1D(name, title, bins, xmin, xmax)` is a fixed-binning histogram.
  - Bin `0` is the underflow bin, bins `1..bins` cover `[xmin, xmax)`, and bin
    `bins + 1` is the overflow bin.
  - Methods:
    - `find_bin(value)`
    - `fill(value, weight=1.0)`, which returns the bin index
    - `bin_content(index)`
    - `to_dict()`
  - Other members: `contents` and `entries`.
  - The constructor raises `ValueError` if `bins < 1` or `xmax <= xmin`.

### `analysis_pipeline.stages`

`BaseStage` (in `stages.base`) is the abstract base of every stage.

- Call `init(parameters, manager)` first. It stores a copy of the parameters and
  the shared manager, then calls the `on_init()` hook.
- Subclasses implement `process()` and the `name` property.
- `manager` raises `RuntimeError` before `init` has been called.
- `BaseInputStage` adds an abstract `set_input(bundle)` that takes an
  `InputBundle`.
- Invalid settings raise `StageConfigError`, which is a `ValueError`.

`ClearProductsStage` (in `stages.clear_products`) removes the products that are
listed under its `products` parameter.

- `products` must be a list of strings.

`TH1BuilderStage` (in `stages.th1_builder`) reads one numeric member of an
input product and fills that value into a `Histogram1D` product. It takes these
parameters:

| Parameter       | Default              | Meaning                            |
|-----------------|----------------------|------------------------------------|
| `input_product` | required             | name of the product to read        |
| `product_name`  | `"hist"`             | name of the histogram product      |
| `value_key`     | `"value"`            | member of the input object to read |
| `title`         | same as `product_name` | histogram title                  |
| `bins`          | `100`                | number of bins                     |
| `min`           | `0.0`                | lower edge                         |
| `max`           | `1.0`                | upper edge                         |

How the stage behaves when it runs:

- On its first run, the stage creates the histogram and tags it `histogram` and
  `built_by_th1_builder`.
- Every run adds one entry to the histogram.
- The member must be an `int` or a `float`.
- A missing input, a missing member, an unsupported member type, or an existing
  product that is not a `Histogram1D` is logged as an error. `process()` does
  not raise in these cases.

## Example

```python
from analysis_pipeline.data_product import PipelineDataProduct
from analysis_pipeline.objects import Parameter
from analysis_pipeline.product_manager import PipelineDataProductManager
from analysis_pipeline.stages.clear_products import ClearProductsStage
from analysis_pipeline.stages.th1_builder import TH1BuilderStage

manager = PipelineDataProductManager()
manager.add_or_update(
    "energy", PipelineDataProduct(Parameter("energy", 0.42), tags=("random",))
)

builder = TH1BuilderStage()
builder.init(
    {"input_product": "energy", "product_name": "energy_hist",
     "value_key": "value", "bins": 10, "min": 0.0, "max": 1.0},
    manager,
)
builder.process()

with manager.checkout_read("energy_hist") as handle:
    hist = handle.product.object
    print(hist.bin_content(hist.find_bin(0.42)))  # 1.0

cleaner = ClearProductsStage()
cleaner.init({"products": ["energy"]}, manager)
cleaner.process()
print(manager.has_product("energy"))  # False
```

## What the package does not do

The package supplies building blocks only. It does not provide:

- a runner that reads a pipeline configuration and calls the stages in order,
- a registry for looking up stages by name,
- a stage that generates data,
- a command-line tool,
- any way to write products to files.

You create the stages and call `init` and `process` yourself. To save results,
take them from `serialize_all()` or `to_json()`.