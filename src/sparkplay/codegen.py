"""Render a configuration as the PySpark program it stands for.

Purely textual; nothing here feeds back into the cost model.
"""

from __future__ import annotations

from sparkplay.config.schema import JoinType, PartitionStrategy, SimulationConfig, value_text

# Repartition target written into the sample program
REPARTITION_TARGETS: dict[PartitionStrategy, int] = {
    PartitionStrategy.GOOD: 4,
    PartitionStrategy.BAD: 1,
}


def generate_code(config: SimulationConfig) -> str:
    """Sample PySpark code for *config*."""
    broadcast = config.join_type == JoinType.BROADCAST
    target = REPARTITION_TARGETS.get(config.partition_strategy)  # type: ignore[call-overload]
    join_key = value_text(config.join_key)
    primary = value_text(config.join_primary)
    secondary = value_text(config.join_secondary)

    lines = [
        f"# Spark Simulation Code (Cluster: {value_text(config.cluster_size)})",
        f"# Join: {primary} JOIN {secondary} on {join_key}",
    ]
    if broadcast:
        lines.append("from pyspark.sql.functions import broadcast")
    lines += [
        f'spark.conf.set("spark.sql.adaptive.enabled", "{str(config.aqe_enabled).lower()}")',
        "",
        f'df = spark.read.format("{value_text(config.file_format).lower()}")'
        f'.load("path/to/{value_text(config.dataset_size).lower()}_dataset")',
        "",
        f"df = df.repartition({target})" if target is not None else "# No explicit repartition",
        "",
        "df.cache()" if config.use_cache else "# Not cached",
        "",
        'df2 = spark.read.parquet("dim_table")',
        "",
        f'result = df.join({"broadcast(df2)" if broadcast else "df2"}, "{join_key}")',
        "",
        'result.write.mode("overwrite").parquet("output")',
    ]
    return "\n".join(lines) + "\n"
