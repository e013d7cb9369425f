"""
dpwh_pipeline.pipelines — End-to-end pipeline orchestrators.

    from dpwh_pipeline.pipelines import flood_control

    session = flood_control.load("data/dpwh_flood_control_projects.csv")
    paths = flood_control.generate_reports(session, output_dir="output")
"""
