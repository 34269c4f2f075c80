from dleq.utils.groups import ensure_bn, in_range, is_subgroup_element, mod_pow_neg
