import os
import sys
import logging
import streamlit as st
import pandas as pd
import plotly.graph_objects as go

# Streamlit runs this file directly and only puts src/app on sys.path
# (where logging_config lives); add src for the engine packages.
current_file = os.path.abspath(__file__)
src_root = os.path.abspath(os.path.join(os.path.dirname(current_file), '..'))
if src_root not in sys.path:
	sys.path.insert(0, src_root)

from anthropometry import config as anthro_cfg
from anthropometry.units import display_range, format_value
from fit_model.measurement_set import MeasurementSet
from fit_model.size_calculation import calculate_size
from logging_config import setup_logging

logger = logging.getLogger('app')

LABELS = {'chest': 'Chest', 'waist': 'Waist', 'hips': 'Hips'}


def _session(gender):
	"""Return the MeasurementSet for the chosen gender, creating it on first use or gender change."""
	current = st.session_state.get('measurements')
	if current is None or current.gender != gender:
		current = MeasurementSet(gender)
		st.session_state['measurements'] = current
		logger.info(f"New {gender} measurement session")
	return current


def morph_chart(weights):
	names = sorted(weights)
	fig = go.Figure(go.Bar(x=[weights[n] for n in names], y=names, orientation='h'))
	fig.update_layout(title='Morph target weights', xaxis_title='Influence', height=420)
	return fig


def main():
	setup_logging(logging.INFO)
	st.title("Body Measurement Preview")
	st.write("Estimate body measurements from height and weight and inspect the resulting avatar morph weights.")

	gender = st.sidebar.selectbox('Gender', options=list(anthro_cfg.GENDERS), index=0)
	use_metric = st.sidebar.checkbox('Metric units', value=True)
	measurements = _session(gender)

	st.sidebar.subheader('Height & weight')
	h_min, h_max = anthro_cfg.HEIGHT_LIMITS
	w_min, w_max = anthro_cfg.WEIGHT_LIMITS
	height = st.sidebar.slider('Height (cm)', min_value=int(h_min), max_value=int(h_max), value=int(measurements.height))
	weight = st.sidebar.slider('Weight (kg)', min_value=int(w_min), max_value=int(w_max), value=int(measurements.weight))
	st.sidebar.caption(f"{format_value(height, 'height', use_metric)} / {format_value(weight, 'weight', use_metric)}")
	if height != measurements.height or weight != measurements.weight:
		measurements.set_height_weight(height, weight)

	st.subheader('Body measurements')
	for name, label in LABELS.items():
		slider = measurements.slider_range(name)
		baseline = measurements.baseline_value(name)
		step = display_range(name, True, slider.min, slider.max)['step']
		# a new baseline or range means a new widget, so a value left over from an
		# earlier height/weight never comes back as a user edit
		key = f"slider_{gender}_{name}_{baseline}_{slider.min}_{slider.max}"
		col_slider, col_reset = st.columns([4, 1])
		with col_slider:
			value = st.slider(
				f"{label} (cm) - suggested {baseline:.1f}",
				min_value=float(slider.min),
				max_value=float(slider.max),
				value=float(measurements[name]),
				step=float(step),
				key=key,
			)
		if value != measurements[name]:
			measurements.set_measurement(name, value)
		with col_reset:
			if name in measurements.user_edited and st.button('Reset', key=f"reset_{name}"):
				measurements.reset_measurement(name)
				st.session_state.pop(key, None)
				st.rerun()
		mapping = measurements.morph_mapping(name)
		marker = 'at suggested value' if mapping.is_at_baseline else 'adjusted'
		st.caption(f"{format_value(measurements[name], name, use_metric)} ({marker}), morph {mapping.morph_value:.3f}")

	size, confidence = calculate_size(measurements.as_dict(), gender)
	st.metric('Suggested size', size, help=f'Confidence {confidence}%')

	weights = measurements.morph_weights()
	st.plotly_chart(morph_chart(weights))
	with st.expander('Raw values'):
		st.dataframe(pd.DataFrame({
			'measurement': list(measurements.as_dict()),
			'value': list(measurements.as_dict().values()),
		}))
		st.json(measurements.shape_keys())


if __name__ == "__main__":
	main()
