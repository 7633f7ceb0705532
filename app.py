import gradio as gr
from functools import partial

from array_manager.config import Settings
from array_manager.handlers import (
    build_tree_handler,
    compare_documents_handler,
    export_dotted_handler,
    group_records_handler,
    load_and_inspect,
    load_left_file,
    load_right_file,
    lookup_path_handler,
)
from array_manager.logger import logger, set_level

settings = Settings.load()
set_level(settings.LOG_LEVEL)

# --- UI Definition ---
with gr.Blocks(title="Array Manager Playground") as demo:
    gr.Markdown("# Array Manager Playground")
    gr.Markdown("Upload JSON documents and try dot-path lookups, grouping, trees and recursive diffs.")

    # State
    json_data_state = gr.State()
    left_data_state = gr.State()
    right_data_state = gr.State()

    with gr.Tab("Explore"):
        with gr.Row():
            with gr.Column(scale=1):
                gr.Markdown("### 1. Import")
                file_input = gr.File(label="Upload JSON File", file_types=[".json"])
                status_msg = gr.Textbox(label="Status", interactive=False)

                gr.Markdown("### 2. Look up a path")
                path_selector = gr.Dropdown(
                    label="Path",
                    choices=[],
                    allow_custom_value=True,
                    interactive=True,
                )
                lookup_btn = gr.Button("Get")
                lookup_status = gr.Textbox(label="Lookup", interactive=False)
                lookup_value = gr.JSON(label="Value")

            with gr.Column(scale=1):
                gr.Markdown("### 3. Dotted view")
                dotted_table = gr.Dataframe(
                    headers=["Path", "Value"],
                    datatype=["str", "str"],
                    col_count=(2, "fixed"),
                    interactive=False,
                    label=f"First {settings.PREVIEW_LIMIT} leaves",
                )

                gr.Markdown("### 4. Export")
                root_path_selector = gr.Dropdown(
                    label="Data Root Path (records to export)",
                    choices=["(root)"],
                    value="(root)",
                    allow_custom_value=True,
                    interactive=True,
                )
                output_format = gr.Radio(choices=["CSV", "JSON"], value="CSV", label="Output Format")
                output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="output")
                export_btn = gr.Button("Export Dotted Rows", variant="primary")
                download_output = gr.File(label="Download Result")

        file_input.upload(
            fn=partial(load_and_inspect, limit=settings.PREVIEW_LIMIT),
            inputs=[file_input],
            outputs=[json_data_state, path_selector, root_path_selector, status_msg, dotted_table],
        )

        lookup_btn.click(
            fn=lookup_path_handler,
            inputs=[json_data_state, path_selector],
            outputs=[lookup_value, lookup_status],
        )

        export_btn.click(
            fn=export_dotted_handler,
            inputs=[json_data_state, root_path_selector, output_format, output_filename],
            outputs=[download_output, status_msg],
        )

    with gr.Tab("Group & Tree"):
        gr.Markdown("Records are read from the root path chosen on the Explore tab.")
        with gr.Row():
            with gr.Column():
                gr.Markdown("### Group records")
                group_path = gr.Textbox(label="Group by path", placeholder="type")
                group_mode = gr.Radio(choices=["Group", "Count"], value="Group", label="Mode")
                group_btn = gr.Button("Group")
                group_status = gr.Textbox(label="Status", interactive=False)
                group_output = gr.Code(label="Result", language=None)
            with gr.Column():
                gr.Markdown("### Build a tree")
                parent_field = gr.Textbox(label="Parent field", value="parent_id")
                id_field = gr.Textbox(label="Id field", value="id")
                children_field = gr.Textbox(label="Children field", value="children")
                tree_btn = gr.Button("Build Tree")
                tree_status = gr.Textbox(label="Status", interactive=False)
                tree_output = gr.Code(label="Tree", language=None)

        group_btn.click(
            fn=group_records_handler,
            inputs=[json_data_state, root_path_selector, group_path, group_mode],
            outputs=[group_output, group_status],
        )

        tree_btn.click(
            fn=build_tree_handler,
            inputs=[json_data_state, root_path_selector, parent_field, children_field, id_field],
            outputs=[tree_output, tree_status],
        )

    with gr.Tab("Compare"):
        gr.Markdown("### 1. Upload both documents")
        with gr.Row():
            with gr.Column():
                left_file = gr.File(label="Left Document", file_types=[".json"])
                left_status = gr.Textbox(label="Left Status", interactive=False)
            with gr.Column():
                right_file = gr.File(label="Right Document", file_types=[".json"])
                right_status = gr.Textbox(label="Right Status", interactive=False)

        gr.Markdown("### 2. Compare")
        strict_compare = gr.Checkbox(label="Strict comparison (1 and 1.0 differ)", value=True)
        compare_btn = gr.Button("Compare", variant="primary")
        compare_status = gr.Textbox(label="Summary", interactive=False)
        compare_output = gr.JSON(label="Differences")

        left_file.upload(fn=load_left_file, inputs=[left_file], outputs=[left_data_state, left_status])
        right_file.upload(fn=load_right_file, inputs=[right_file], outputs=[right_data_state, right_status])

        compare_btn.click(
            fn=compare_documents_handler,
            inputs=[left_data_state, right_data_state, strict_compare],
            outputs=[compare_output, compare_status],
        )

if __name__ == "__main__":
    logger.info("Starting playground on %s:%d", settings.HOST, settings.PORT)
    demo.launch(server_name=settings.HOST, server_port=settings.PORT)
