import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px

from tokentrie import TokenTrie, TokenizerConfig
from tokentrie.log import setup_logger
from workloads import WorkLoad, WORKLOAD_TOKENIZERS
from workloads.bench import BenchConfig, run_benchmark, summarize

logger = setup_logger("tokentrie", level="info")

# Configure page
st.set_page_config(
    page_title="TokenTrie Explorer",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("🌳 TokenTrie Explorer")
st.markdown("---")


def build_workload(name, n, seed):
    wl = WorkLoad(seed=seed)
    return getattr(wl, name)(n)


# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox("Choose a section:", ["Build", "Query", "Benchmark"])

    st.markdown("---")
    st.subheader("Workload")
    workload = st.selectbox("Key shape", list(WORKLOAD_TOKENIZERS))
    num_keys = st.number_input("Number of keys", min_value=1, max_value=200_000, value=2_000, step=500)
    seed = st.number_input("Seed", min_value=0, value=42, step=1)

    default_kind, default_delim = WORKLOAD_TOKENIZERS[workload]
    st.subheader("Tokenizer")
    kind = st.radio("Kind", ["fixed", "delimiter"], index=0 if default_kind == "fixed" else 1)
    if kind == "fixed":
        tok_config = TokenizerConfig(kind="fixed", width=int(st.number_input("Width (bytes)", min_value=1, value=1)))
    else:
        tok_config = TokenizerConfig(kind="delimiter", delimiter=st.text_input("Delimiter", value=default_delim or "."))

    if st.button("🔄 Rebuild trie"):
        st.session_state.pop("trie", None)


if "trie" not in st.session_state or st.session_state.get("trie_key") != (workload, num_keys, seed, tok_config.label()):
    keys = build_workload(workload, int(num_keys), int(seed))
    trie = TokenTrie.from_config(tok_config)
    trie.batch_add((k, i) for i, k in enumerate(keys))
    st.session_state["trie"] = trie
    st.session_state["keys"] = keys
    st.session_state["trie_key"] = (workload, num_keys, seed, tok_config.label())
    logger.info("built %s trie over %d %s keys", tok_config.label(), len(keys), workload)

trie = st.session_state["trie"]
keys = st.session_state["keys"]


if page == "Build":
    st.header("📦 Trie Structure")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Keys inserted", len(keys))
    with col2:
        st.metric("Distinct keys", len(set(keys)))
    with col3:
        st.metric("Nodes", trie.count_nodes())
    with col4:
        st.metric("Avg branch factor", f"{trie.count_nodes(get_avg_branch_factor=True):.2f}")

    st.subheader("Sample keys")
    st.dataframe(pd.DataFrame({"key": keys[:50]}))

    st.subheader("Token depth distribution")
    depths = np.array([len(trie.tokenizer.tokenize(k)) for k in keys])
    fig = px.histogram(x=depths, nbins=int(depths.max()) if depths.size else 1,
                       title="Tokens per key")
    fig.update_layout(xaxis_title="Tokens", yaxis_title="Keys")
    st.plotly_chart(fig, use_container_width=True)

    st.subheader("Top-level fan-out")
    top = pd.DataFrame(
        [(tok, child.count) for tok, child in trie.children.items()],
        columns=["token", "count"],
    ).sort_values("count", ascending=False).head(30)
    if len(top) > 0:
        st.plotly_chart(px.bar(top, x="token", y="count", title="Traversal count of root children"),
                        use_container_width=True)

elif page == "Query":
    st.header("🔍 Query")

    query = st.text_input("Key or prefix", value=keys[0] if keys else "")
    mode = st.selectbox("Operation", ["exists", "get", "fuzzy_get", "get_keys_by_partial_path", "get_keys_under_prefix"])

    if query is not None:
        if mode == "exists":
            st.write(f"**exists:** {trie.exists(query)}")
        elif mode == "get":
            node = trie.get(query)
            if node is None:
                st.info("No node on that path")
            else:
                st.json({"count": node.count, "is_key_end": node.is_key_end,
                         "data": repr(node.data), "children": sorted(node.children)[:100]})
        elif mode == "fuzzy_get":
            nodes = trie.fuzzy_get(query)
            st.write(f"**{len(nodes)} nodes matched**")
            st.dataframe(pd.DataFrame([
                {"count": n.count, "is_key_end": n.is_key_end, "data": repr(n.data), "children": len(n.children)}
                for n in nodes
            ]))
        elif mode == "get_keys_by_partial_path":
            st.dataframe(pd.DataFrame({"key": sorted(trie.get_keys_by_partial_path(query))}))
        else:
            found = sorted(trie.get_keys_under_prefix(query))
            st.write(f"**{len(found)} keys**")
            st.dataframe(pd.DataFrame({"key": found}))

    st.subheader("Remove")
    to_remove = st.text_input("Key to remove")
    if st.button("Remove key") and to_remove:
        if trie.remove(to_remove):
            st.success(f"Removed {to_remove!r}")
        else:
            st.warning(f"{to_remove!r} is not a stored key")

elif page == "Benchmark":
    st.header("⏱️ Benchmark")

    repeats = st.slider("Repeats", min_value=1, max_value=10, value=3)
    prefix_len = st.slider("Prefix length (tokens)", min_value=1, max_value=6, value=1)

    if st.button("Run benchmark"):
        df = run_benchmark(keys, tok_config, BenchConfig(repeats=repeats, prefix_len=prefix_len, seed=int(seed)))
        st.session_state["bench"] = df

    if "bench" in st.session_state:
        df = st.session_state["bench"]
        st.subheader("Summary (µs per op)")
        st.dataframe(summarize(df))

        fig = px.box(df, x="op", y="us_per_op", points="all", title="Per-op latency across repeats")
        fig.update_layout(xaxis_title="Operation", yaxis_title="µs / op")
        st.plotly_chart(fig, use_container_width=True)

        st.subheader("Raw results")
        st.dataframe(df, use_container_width=True)
    else:
        st.info("👆 Run a benchmark to see timings")

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | TokenTrie Explorer
    </div>
    """,
    unsafe_allow_html=True
)
