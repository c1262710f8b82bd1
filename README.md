# rngkit

Small random number generators and sampling helpers. They have no
dependencies and give reproducible output.

## Installation

```
pip install rngkit
```

## Generators

- `rngkit.xoshiro.Xoshiro256PlusPlus` and `rngkit.xoshiro.Xoshiro128PlusPlus`
  are fast generators that are not cryptographic. You can build one with
  `from_seed(bytes)`, `seed_from_u64(int)` or `from_rng(other_rng)`. The seed
  is 32 bytes for the 256-bit generator and 16 bytes for the 128-bit one. An
  all-zero seed is replaced with the seed that `seed_from_u64(0)` produces.
- `rngkit.xoshiro.SmallRng` is the recommended small, fast generator. It
  currently uses the xoshiro256++ algorithm.
- `rngkit.mock.StepRng(initial, increment)` yields an arithmetic sequence of
  64-bit values, and the addition wraps. It is meant for tests. You can
  compare instances and pickle them.
- `rngkit.adapter.ReadRng(reader)` reads its random bytes from any binary
  file-like object:
  - `try_fill_bytes` raises `rngkit.adapter.ReadError` when the reader fails
    or runs out of data.
  - `fill_bytes`, `next_u32` and `next_u64` raise `rngkit.rng.RngError` in
    that case.
  - `ReadError` is a subclass of `RngError`.

Every generator derives from `rngkit.rng.Rng`. To add your own generator,
subclass it and implement `next_u32` and `next_u64`. The base class provides
the following:

```python
from rngkit.xoshiro import Xoshiro256PlusPlus

rng = Xoshiro256PlusPlus.seed_from_u64(42)
rng.next_u32()
rng.next_u64()
rng.gen_range(0, 10)                  # 0 <= n < 10
rng.gen_range(1, 6, inclusive=True)   # 1 <= n <= 6
rng.gen_range(-4.5, 1.7)              # a float bound gives a float
rng.gen_float()                       # [0, 1)
rng.gen_bool(0.25)
rng.gen_ratio(2, 3)
rng.random_bytes(16)
buf = bytearray(10)
rng.fill_bytes(buf)                   # fills any writable buffer
rng.fill_ints(4, 32, False)           # four u32 values built from random bytes
```

How these methods treat bad input:

- `gen_range` raises `ValueError` for an empty range.
- `gen_bool` raises `ValueError` for a probability outside [0, 1].
- `gen_ratio` raises `ValueError` if the denominator is zero or smaller than
  the numerator.
- `fill_ints` accepts widths of 8, 16, 32, 64 and 128 bits.

`rng.sample(distr)` draws one value from any object that has a
`sample(rng)` method. `rng.sample_iter(distr)` yields such values without
end.

## Sequences

```python
from rngkit import slices, iters, index

items = list("abcdefghijklmn")
slices.choose(items, rng)                           # one element, or None if empty
slices.choose_index(items, rng)                     # its index, or None if empty
slices.choose_multiple(items, rng, 3)               # distinct elements, random order
slices.choose_weighted(items, rng, lambda x: 1)
slices.choose_weighted_index(items, rng, lambda x: 1)
slices.choose_multiple_weighted(items, rng, 2, lambda x: 1.0)
slices.shuffle(items, rng)                          # shuffles in place
chosen, rest = slices.partial_shuffle(items, rng, 4)

iters.iter_choose(range(100), rng)
iters.iter_choose_stable(range(100), rng)
iters.iter_choose_multiple(range(100), rng, 8)      # reservoir sampling
buf = [None] * 8
iters.iter_choose_multiple_fill(range(100), rng, buf)  # returns the count filled

index.gen_index(rng, 10)                            # 0 <= n < 10
index.sample(rng, 1_000_000, 10)                    # distinct indices in 0..length
index.sample_weighted(rng, 10, lambda i: float(i), 5)
```

`index.sample` picks an algorithm based on `length` and `amount`. You can
also call each algorithm directly:

- `index.sample_floyd`
- `index.sample_inplace`
- `index.sample_rejection`

Asking for more indices than `length` raises `ValueError`.

How `iter_choose` and `iter_choose_stable` differ:

- `iter_choose` uses the length hint of an iterator to skip ahead. Its result
  can therefore depend on that hint.
- `iter_choose_stable` gives results that depend only on the number of
  elements.

Weighted selection raises `index.WeightedError`, a subclass of `ValueError`.
Its `kind` attribute, an `index.WeightedErrorKind`, says what was wrong:

- `NO_ITEM`: the sequence was empty.
- `INVALID_WEIGHT`: a weight was negative or NaN.
- `ALL_WEIGHTS_ZERO`: every weight was zero.

`choose_multiple_weighted` and `sample_weighted` accept weights that are all
zero. In that case every element is equally likely.

Results are deterministic for a given seed. The same seed gives the same
shuffles and samples on every platform.

## What this package does not do

- It has no generator fed by the operating system's entropy source.
- It has no cryptographically secure generator.
- It has no per-thread shared generator and no generator that reseeds itself.
- It has no library of probability distributions beyond the methods above.

All generators must be seeded explicitly. If you need unpredictable seeds,
take the seed bytes from a source such as `os.urandom` and pass them to
`from_seed`.