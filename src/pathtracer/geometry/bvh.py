# geometry/bvh.py
import logging
import math
from typing import List, Optional, Sequence
import numpy as np
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord, TimeInterval

logger = logging.getLogger(__name__)

# Partitions with fewer members than this stay leaves.
MIN_SPLIT_SIZE = 3

class HittableDescriptor:
    """
    A primitive's index into the object array together with its bounding box
    over the shutter interval.
    """
    def __init__(self, object_idx: int, box: AABB):
        self.object_idx = object_idx
        self.box = box
        self.centroid = box.centroid()

    def __repr__(self) -> str:
        return f"HittableDescriptor({self.object_idx}, {self.box})"

class BVHNode:
    """
    One node of the BVH arena.

    Leaves cover descriptors[start:end]; interior nodes keep the arena
    indices of their two children and the axis they were split on. Every
    node covers descriptors[start:end] so `count` is its descendant count.
    """
    def __init__(self, box: AABB, start: int, end: int):
        self.box = box
        self.start = start
        self.end = end
        self.left = -1
        self.right = -1
        self.axis = 0

    @property
    def is_leaf(self) -> bool:
        return self.left < 0

    @property
    def count(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"BVHNode(leaf {self.start}:{self.end}, {self.box})"
        return f"BVHNode(axis={self.axis}, left={self.left}, right={self.right}, {self.box})"

def _centroid_key(axis: int):
    # NaN centroids sort after every number and compare equal to each other;
    # the stable sort keeps their input order.
    def key(desc: HittableDescriptor):
        c = desc.centroid[axis]
        if math.isnan(c):
            return (1, 0.0)
        return (0, c)
    return key

def _partition_box(descriptors: Sequence[HittableDescriptor]) -> AABB:
    if not descriptors:
        return AABB.infinite_box()
    box = descriptors[0].box
    for desc in descriptors[1:]:
        box = AABB.surrounding_box(box, desc.box)
    return box

def _sweep_costs(in_partition: Sequence[HittableDescriptor]) -> List[float]:
    """
    For each index i, the cost SA(L)*N(L) + SA(R)*N(R) of splitting after i,
    where L holds members 0..i and R holds the rest.
    """
    n = len(in_partition)
    sa_sums = [0.0] * n

    # Left-to-right sweep: merging the first box with itself leaves its area unchanged.
    box_acc = in_partition[0].box
    for i in range(n):
        box_acc = AABB.surrounding_box(box_acc, in_partition[i].box)
        sa_sums[i] += box_acc.surface_area() * (i + 1)

    # Right-to-left sweep over the members strictly right of i.
    box_acc = in_partition[-1].box
    n_acc = 0
    for i in range(n - 2, -1, -1):
        n_acc += 1
        box_acc = AABB.surrounding_box(box_acc, in_partition[i + 1].box)
        sa_sums[i] += box_acc.surface_area() * n_acc
    return sa_sums

def sah_sweep_build(descriptors: List[HittableDescriptor], axes_count: int = 3):
    """
    Builds the BVH arena with the Surface Area Heuristic.

    Descriptors are kept sorted by centroid along every axis; a partition is
    split at the (axis, index) minimizing SA(L)*N(L) + SA(R)*N(R), and the
    other axes' orderings are stably re-partitioned so each stays sorted
    within the two halves. Returns (nodes, ordered_descriptors); leaf ranges
    index into ordered_descriptors.
    """
    axes = [sorted(descriptors, key=_centroid_key(axis)) for axis in range(axes_count)]
    total = len(descriptors)

    nodes = [BVHNode(_partition_box(axes[0]), 0, total)]
    to_split = [0]

    while to_split:
        node = nodes[to_split.pop()]
        start, end = node.start, node.end
        if end - start < MIN_SPLIT_SIZE:
            continue

        best_cost = math.inf
        best_axis = -1
        pivot = -1
        for axis in range(axes_count):
            costs = _sweep_costs(axes[axis][start:end])
            for i, cost in enumerate(costs):
                if math.isnan(cost):
                    continue
                if best_axis < 0 or cost < best_cost:
                    best_cost, best_axis, pivot = cost, axis, i

        if best_axis < 0 or pivot + 1 >= end - start:
            # No usable split; keeping the group whole avoids endless splitting.
            continue

        left_ids = {desc.object_idx for desc in axes[best_axis][start:start + pivot + 1]}
        for axis in range(axes_count):
            if axis == best_axis:
                continue
            partition = axes[axis][start:end]
            axes[axis][start:end] = (
                [d for d in partition if d.object_idx in left_ids] +
                [d for d in partition if d.object_idx not in left_ids]
            )

        mid = start + pivot + 1
        node.axis = best_axis
        node.left = len(nodes)
        nodes.append(BVHNode(_partition_box(axes[0][start:mid]), start, mid))
        node.right = len(nodes)
        nodes.append(BVHNode(_partition_box(axes[0][mid:end]), mid, end))
        to_split.append(node.left)
        to_split.append(node.right)

    return nodes, axes[0]

class Bvh(Hittable):
    """
    Bounding volume hierarchy over a fixed list of primitives.

    The primitives stay in `objects`; nodes only refer to them by index.
    The tree is built once for a shutter interval and never changes.
    """
    def __init__(self, objects: Sequence[Hittable], time_interval: TimeInterval = (0.0, 1.0)):
        self.objects = list(objects)
        self.time_interval = time_interval
        descriptors = [HittableDescriptor(i, obj.bounding_box(time_interval))
                       for i, obj in enumerate(self.objects)]
        self.nodes, self.descriptors = sah_sweep_build(descriptors)
        logger.debug("Built BVH over %d objects: %d nodes, %d leaves",
                     len(self.objects), self.node_count, self.leaf_count)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def leaf_count(self) -> int:
        return sum(1 for node in self.nodes if node.is_leaf)

    def depth(self) -> int:
        depth = 0
        stack = [(0, 1)]
        while stack:
            idx, level = stack.pop()
            depth = max(depth, level)
            node = self.nodes[idx]
            if not node.is_leaf:
                stack.append((node.left, level + 1))
                stack.append((node.right, level + 1))
        return depth

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        nodes = self.nodes
        stack = [0]

        while stack:
            node = nodes[stack.pop()]
            # Later boxes are tested against the closest hit found so far.
            if not node.box.hit(ray, t_min, closest_so_far):
                continue
            if node.is_leaf:
                for desc in self.descriptors[node.start:node.end]:
                    if not desc.box.hit(ray, t_min, closest_so_far):
                        continue
                    rec = self.objects[desc.object_idx].hit(ray, t_min, closest_so_far)
                    if rec is not None:
                        closest_so_far = rec.t
                        hit_record = rec
            elif ray.direction[node.axis] < 0:
                # Visit the child nearer to the ray origin first.
                stack.append(node.left)
                stack.append(node.right)
            else:
                stack.append(node.right)
                stack.append(node.left)
        return hit_record

    def bounding_box(self, time_interval: TimeInterval = (0.0, 1.0)) -> AABB:
        return self.nodes[0].box

def flatten_bvh(bvh: Bvh):
    """
    Export the BVH arena as NumPy arrays.

    Returns seven arrays:
      - bbox_min: (n,3) array of minimum coordinates.
      - bbox_max: (n,3) array of maximum coordinates.
      - left_indices: (n,) array (index of left child, or -1 for a leaf).
      - right_indices: (n,) array (index of right child, or -1 for a leaf).
      - is_leaf: (n,) int array (1 if leaf, 0 otherwise).
      - first_indices: (n,) array, start of the node's descriptor range.
      - counts: (n,) array, number of descriptors covered by the node.
    Leaf ranges index into `bvh.descriptors`; infinite boxes export as +/-inf.
    """
    n = bvh.node_count
    bbox_min = np.zeros((n, 3), dtype=np.float64)
    bbox_max = np.zeros((n, 3), dtype=np.float64)
    left_indices = -np.ones(n, dtype=np.int32)
    right_indices = -np.ones(n, dtype=np.int32)
    is_leaf = np.zeros(n, dtype=np.int32)
    first_indices = np.zeros(n, dtype=np.int32)
    counts = np.zeros(n, dtype=np.int32)

    for i, node in enumerate(bvh.nodes):
        bbox_min[i] = node.box.minimum.to_tuple()
        bbox_max[i] = node.box.maximum.to_tuple()
        left_indices[i] = node.left
        right_indices[i] = node.right
        is_leaf[i] = 1 if node.is_leaf else 0
        first_indices[i] = node.start
        counts[i] = node.count

    return bbox_min, bbox_max, left_indices, right_indices, is_leaf, first_indices, counts

def bvh_stats(bvh: Bvh) -> dict:
    """
    Shape summary of a built BVH, computed from its flattened arrays.

    `sah_cost` is the expected number of box and primitive tests per ray
    relative to the root box, with every box visited in proportion to its
    surface area. It is NaN when the root box is infinite or degenerate.
    """
    bbox_min, bbox_max, _, _, is_leaf, _, counts = flatten_bvh(bvh)
    leaves = is_leaf == 1
    leaf_sizes = counts[leaves]
    with np.errstate(invalid="ignore"):
        extent = bbox_max - bbox_min
        area = 2.0 * (extent[:, 0] * extent[:, 1] +
                      extent[:, 0] * extent[:, 2] +
                      extent[:, 1] * extent[:, 2])
        root_area = area[0]
        if np.isfinite(root_area) and root_area > 0:
            sah_cost = float((area[~leaves].sum() + (area[leaves] * leaf_sizes).sum()) / root_area)
        else:
            sah_cost = math.nan
    return {
        "nodes": bvh.node_count,
        "leaves": int(leaves.sum()),
        "depth": bvh.depth(),
        "max_leaf_size": int(leaf_sizes.max()),
        "mean_leaf_size": float(leaf_sizes.mean()),
        "sah_cost": sah_cost,
    }
