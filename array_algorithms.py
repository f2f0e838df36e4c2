from collections import Counter

import prefix_aggregate
from prefix_aggregate import matching, snapshot, as_python


def as_predicate(matcher):
    """A callable is used as-is; any other value matches by equality."""
    if callable(matcher):
        return matcher
    return lambda value: value == matcher


#------------------------------------------------------------------------------
# Equilibrium indices
#   i is an equilibrium index iff sum(s[0 .. i-1]) == sum(s[i+1 .. end]),
#   both empty sides counting as 0 and s[i] itself excluded.
#------------------------------------------------------------------------------
def equilibrium_indices_brute(sequence):
    """Recompute both side sums at every index: O(n^2) time, O(1) space."""
    sequence = snapshot(sequence)
    n = len(sequence)
    found = []
    for i in range(n):
        left = 0
        for j in range(i):
            left += sequence[j]
        right = 0
        for j in range(i + 1, n):
            right += sequence[j]
        if left == right:
            found.append(i)
    return found

def equilibrium_indices_prefix(sequence):
    """O(n) time, O(n) space through a full prefix sum."""
    prefix = prefix_aggregate.build(sequence)
    total = prefix.total
    found = []
    for i in range(len(prefix)):
        left  = prefix.before(i)
        right = total - prefix[i]
        if left == right:
            found.append(i)
    return found

def equilibrium_indices_running(sequence):
    """O(n) time, O(1) extra space: keep left_sum, derive right_sum."""
    sequence = snapshot(sequence)
    total = 0
    for value in sequence:
        total += value

    found = []
    left_sum = 0
    for i, value in enumerate(sequence):
        right_sum = total - left_sum - value
        if left_sum == right_sum:
            found.append(i)
        left_sum += value
    return found

def count_equilibrium_indices(sequence) -> int:
    return len(equilibrium_indices_running(sequence))


#------------------------------------------------------------------------------
# Ordered pair counts:  #(i, j) with i < j, first(s[i]) and second(s[j])
#------------------------------------------------------------------------------
def count_ordered_pairs(sequence, first, second) -> int:
    """
    Reference nested scan, O(n^2) time and O(1) space.  `first` and `second`
    are predicates or plain values compared with ==.
    """
    sequence = snapshot(sequence)
    first, second = as_predicate(first), as_predicate(second)
    n = len(sequence)
    count = 0
    for i in range(n):
        if not first(sequence[i]):
            continue
        for j in range(i + 1, n):
            if second(sequence[j]):
                count += 1
    return count

count_pairs_brute = count_ordered_pairs

def count_pairs_prefix(sequence, first, second) -> int:
    """
    Prefix count of `second` matches; each `first` match at i pairs with
    every `second` match in (i .. last], i.e. prefix[last] - prefix[i].
    """
    sequence = snapshot(sequence)
    first, second = as_predicate(first), as_predicate(second)
    prefix = prefix_aggregate.build(sequence, matching(second))
    total = prefix.total
    count = 0
    for i, value in enumerate(sequence):
        if first(value):
            count += total - prefix[i]
    return count

def count_pairs_suffix(sequence, first, second) -> int:
    """Right-to-left scan with a running count of `second` matches."""
    sequence = snapshot(sequence)
    first, second = as_predicate(first), as_predicate(second)
    seen_second = 0
    count = 0
    for i in range(len(sequence) - 1, -1, -1):
        value = sequence[i]
        # test `first` before counting s[i] so i never pairs with itself
        if first(value):
            count += seen_second
        if second(value):
            seen_second += 1
    return count


#------------------------------------------------------------------------------
# Pair sums:  two distinct positions whose values add up to `target`
#------------------------------------------------------------------------------
def has_pair_with_sum_brute(sequence, target) -> bool:
    sequence = snapshot(sequence)
    target = as_python(target)
    n = len(sequence)
    for i in range(n):
        for j in range(i + 1, n):
            if sequence[i] + sequence[j] == target:
                return True
    return False

def has_pair_with_sum_hash(sequence, target) -> bool:
    """
    Single pass over a set of earlier values.  The lookup happens before the
    current value is inserted, so an element only pairs with itself when it
    occurs twice.
    """
    sequence = snapshot(sequence)
    target = as_python(target)
    seen = set()
    for value in sequence:
        if target - value in seen:
            return True
        seen.add(value)
    return False

def has_pair_with_sum_two_pointer(sequence, target) -> bool:
    """Sort a copy, then converge lo/hi: O(n log n) time."""
    sequence = snapshot(sequence)
    target = as_python(target)
    values = sorted(sequence)
    lo, hi = 0, len(values) - 1
    while lo < hi:
        s = values[lo] + values[hi]
        if s == target:
            return True
        if s < target:
            lo += 1
        else:
            hi -= 1
    return False

def count_pairs_with_sum_brute(sequence, target) -> int:
    sequence = snapshot(sequence)
    target = as_python(target)
    n = len(sequence)
    count = 0
    for i in range(n):
        for j in range(i + 1, n):
            if sequence[i] + sequence[j] == target:
                count += 1
    return count

def count_pairs_with_sum_hash(sequence, target) -> int:
    """Each value pairs with every earlier occurrence of its complement."""
    sequence = snapshot(sequence)
    target = as_python(target)
    seen = Counter()
    count = 0
    for value in sequence:
        count += seen[target - value]
        seen[value] += 1
    return count


#------------------------------------------------------------------------------
# Rotation
#------------------------------------------------------------------------------
def _reverse(buf, lo: int, hi: int):
    """Reverse buf[lo .. hi] in place (closed range)."""
    while lo < hi:
        buf[lo], buf[hi] = buf[hi], buf[lo]
        lo += 1
        hi -= 1

def rotate_right(sequence, k: int) -> list:
    """
    Return a new list where the last k elements come first.
    k is taken modulo len(sequence), so a negative k rotates left.

    Triple reversal on an owned copy:
        reverse [0 .. n-k-1], reverse [n-k .. n-1], reverse [0 .. n-1]
    """
    buf = list(snapshot(sequence))
    n = len(buf)
    if n == 0:
        return buf
    k %= n
    if k == 0:
        return buf
    _reverse(buf, 0, n - k - 1)
    _reverse(buf, n - k, n - 1)
    _reverse(buf, 0, n - 1)
    return buf

def rotate_left(sequence, k: int) -> list:
    return rotate_right(sequence, -k)

def rotate_right_brute(sequence, k: int) -> list:
    """Move the last element to the front, k times: O(n * k)."""
    buf = list(snapshot(sequence))
    n = len(buf)
    if n == 0:
        return buf
    for _ in range(k % n):
        last = buf[n - 1]
        for i in range(n - 1, 0, -1):
            buf[i] = buf[i - 1]
        buf[0] = last
    return buf
